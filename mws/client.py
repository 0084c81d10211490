"""
MWS client.

This module provides the top-level client that owns the seller credentials and
hands them to every request built by the endpoint callers.

Usage:
    from mws.client import create_mws_client

    # Credentials and settings from the environment (.env supported)
    client = create_mws_client()

    response = await client.reports.request_report(
        RequestReportRequest(report_type="_GET_FLAT_FILE_OPEN_LISTINGS_DATA_")
    )
    print(response.data.report_request_id)
"""

from typing import Optional

from .auth import MWSCredentials, resolve_credentials
from .config import MWSConfig
from .metrics import MetricsEmitter, get_metrics_emitter
from .orders import Orders
from .reports import Reports
from .request import Request
from .tracing import init_tracing
from .transport import MWSResponse, Transport


class MWSClient:
    """
    Client for the MWS Orders and Reports sections.

    Attributes:
        credentials: Immutable seller credentials shared by every request
        config: Client configuration
        transport: HTTP transport used for every request
        orders: Orders endpoint callers
        reports: Reports endpoint callers
    """

    def __init__(
        self,
        credentials: MWSCredentials,
        config: Optional[MWSConfig] = None,
        transport: Optional[Transport] = None,
        metrics: Optional[MetricsEmitter] = None,
    ):
        """
        Initialize the MWS client.

        Args:
            credentials: Seller credentials
            config: Optional configuration (timeout, user agent, metrics)
            transport: Optional pre-configured transport
            metrics: Optional metrics emitter; defaults to the global one
                     when metrics are enabled in the configuration
        """
        self.credentials = credentials
        self.config = config or MWSConfig(host=credentials.host)
        self.transport = transport or Transport(
            timeout_seconds=self.config.timeout_seconds,
            user_agent=self.config.user_agent,
        )
        if metrics is None and self.config.metrics_enabled:
            metrics = get_metrics_emitter()
        self.metrics = metrics

        self.orders = Orders(self)
        self.reports = Reports(self)

    def new_request(self, endpoint: str) -> Request:
        return Request(endpoint, self.credentials)

    async def send(self, request: Request) -> MWSResponse:
        return await request.send(self.transport, self.metrics)


def create_mws_client(config: Optional[MWSConfig] = None, **kwargs) -> MWSClient:
    """
    Factory function to create an MWS client.

    Args:
        config: Configuration; loaded from the environment if omitted
        **kwargs: Additional MWSClient options

    Returns:
        Configured MWSClient instance

    Raises:
        ValueError: If no MWS key pair can be found
    """
    config = config or MWSConfig.from_env()
    init_tracing(
        otlp_endpoint=config.otel_endpoint or None,
        enable_console_export=config.otel_console_export,
    )
    return MWSClient(resolve_credentials(config), config=config, **kwargs)
