"""MWS client - Signature Version 2 signed requests for Amazon MWS."""

from .auth import MWSCredentials, SigV2Signer, percent_encode, resolve_credentials
from .client import MWSClient, create_mws_client
from .config import MWSConfig
from .orders import ListOrderItemsRequest, ListOrdersRequest, Orders
from .parameters import ListParameter, Parameter, StringParameter, TimestampParameter
from .reports import Reports, RequestReportRequest
from .request import Request, RequestAlreadySent
from .results import ListOrderItemsResult, ListOrdersResult, RequestReportResult
from .transport import ErrorOrigin, MWSResponse, Transport

__all__ = [
    "ErrorOrigin",
    "ListOrderItemsRequest",
    "ListOrderItemsResult",
    "ListOrdersRequest",
    "ListOrdersResult",
    "ListParameter",
    "MWSClient",
    "MWSConfig",
    "MWSCredentials",
    "MWSResponse",
    "Orders",
    "Parameter",
    "Reports",
    "Request",
    "RequestAlreadySent",
    "RequestReportRequest",
    "RequestReportResult",
    "SigV2Signer",
    "StringParameter",
    "TimestampParameter",
    "Transport",
    "create_mws_client",
    "percent_encode",
    "resolve_credentials",
]
