"""
Test mocks for the MWS client test suite.

Available Mocks:
- MWSMock: Canned MWS XML bodies and httpx-like responses
- MWSMockConfig: Configuration for the MWS mock
"""

from .mws_mock import MWSMock, MWSMockConfig

__all__ = [
    "MWSMock",
    "MWSMockConfig",
]
