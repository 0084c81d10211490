"""
Authentication utilities for the MWS client.

This module provides Signature Version 2 (HmacSHA256) signing for MWS requests.
"""

from .sigv2 import (
    MWSCredentials,
    SigV2Signer,
    canonical_query,
    percent_encode,
    resolve_credentials,
)

__all__ = [
    "MWSCredentials",
    "SigV2Signer",
    "canonical_query",
    "percent_encode",
    "resolve_credentials",
]
