"""
Pytest configuration and fixtures for the MWS client tests.

Usage:
    def test_something(credentials, mws_mock, patch_post):
        post = patch_post(mws_mock.create_mock_response(mws_mock.error_body("X", "Bad")))
        ...
"""

from contextlib import ExitStack
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from mws import MWSClient, MWSCredentials
from tests.mocks import MWSMock


@pytest.fixture
def credentials() -> MWSCredentials:
    """Credentials matching the documented end-to-end example."""
    return MWSCredentials(
        seller_id="S1",
        access_key_id="AKID",
        secret_key="SECRET",
        host="example.test",
    )


@pytest.fixture
def fixed_timestamp() -> datetime:
    return datetime(2013, 9, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def mws_mock() -> MWSMock:
    return MWSMock()


@pytest.fixture
def client(credentials: MWSCredentials) -> MWSClient:
    return MWSClient(credentials)


@pytest.fixture
def patch_post():
    """
    Patch httpx.AsyncClient so that ``post`` returns (or raises) a given value.

    Returns:
        Callable taking ``return_value`` or ``side_effect`` and returning the
        AsyncMock installed as ``post``
    """
    with ExitStack() as stack:
        def _install(return_value=None, side_effect=None) -> AsyncMock:
            mock_client = stack.enter_context(patch("httpx.AsyncClient"))
            post = AsyncMock(return_value=return_value, side_effect=side_effect)
            mock_client.return_value.__aenter__.return_value.post = post
            return post

        yield _install
