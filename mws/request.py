"""
Signed MWS requests.

A Request collects the parameters of one call, signs them with Signature
Version 2 and sends them through a Transport. Each Request is sent at most
once and yields exactly one MWSResponse.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from opentelemetry.trace import Status, StatusCode

from .auth import MWSCredentials, SigV2Signer, canonical_query
from .metrics import MetricsEmitter
from .parameters import Parameter, StringParameter, TimestampParameter
from .tracing import add_request_span_attributes, get_tracer
from .transport import MWSResponse, Transport

logger = logging.getLogger(__name__)

SIGNATURE_KEY = "Signature"


class RequestAlreadySent(Exception):
    """Raised when a Request is sent more than once."""


class Request:
    """
    One in-flight MWS call.

    The access key id, signature method, signature version and timestamp are
    added on construction. Endpoint callers append the action specific
    parameters with ``add_param`` and then ``send``.

    Attributes:
        endpoint: Request path (e.g. "/Orders/2013-09-01")
        credentials: Shared seller credentials
        parameters: Parameters in insertion order
    """

    def __init__(
        self,
        endpoint: str,
        credentials: MWSCredentials,
        timestamp: Optional[datetime] = None,
    ):
        self.endpoint = endpoint
        self.credentials = credentials
        self.parameters: list[Parameter] = []
        self.signature: Optional[str] = None
        self._signer = SigV2Signer(credentials)
        self._sent = False

        self.add_param(StringParameter("AWSAccessKeyId", credentials.access_key_id))
        self.add_param(StringParameter("SignatureMethod", SigV2Signer.SIGNATURE_METHOD))
        self.add_param(StringParameter("SignatureVersion", SigV2Signer.SIGNATURE_VERSION))
        self.add_param(TimestampParameter("Timestamp", timestamp or datetime.now(timezone.utc)))

    def add_param(self, param: Parameter) -> None:
        self.parameters.append(param)

    def canonical_parameters(self) -> dict[str, str]:
        """Merge every parameter's pairs; a later duplicate key wins."""
        merged: dict[str, str] = {}
        for param in self.parameters:
            merged.update(param.serialize())
        return merged

    @property
    def action(self) -> Optional[str]:
        return self.canonical_parameters().get("Action")

    def signing_parameters(self) -> dict[str, str]:
        """The canonical mapping covered by the signature."""
        parameters = self.canonical_parameters()
        parameters.pop(SIGNATURE_KEY, None)
        return parameters

    def string_to_sign(self) -> str:
        return self._signer.string_to_sign(self.endpoint, self.signing_parameters())

    def sign(self) -> str:
        """
        Compute the signature and append it as the Signature parameter.

        Signing twice returns the first signature without recomputing it.
        """
        if self.signature is None:
            self.signature = self._signer.sign(self.endpoint, self.signing_parameters())
            self.add_param(StringParameter(SIGNATURE_KEY, self.signature))
        return self.signature

    def query_string(self) -> str:
        """Encoded query string in insertion order."""
        return canonical_query(self.canonical_parameters(), sort=False)

    def url(self) -> str:
        return f"https://{self.credentials.host}{self.endpoint}?{self.query_string()}"

    async def send(
        self,
        transport: Optional[Transport] = None,
        metrics: Optional[MetricsEmitter] = None,
    ) -> MWSResponse:
        """
        Sign the request and dispatch it.

        Args:
            transport: Transport to use (a default one is created if omitted)
            metrics: Optional EMF emitter for request outcome metrics

        Returns:
            MWSResponse describing exactly one outcome

        Raises:
            RequestAlreadySent: If the request was already sent
        """
        if self._sent:
            raise RequestAlreadySent(f"{self.action or 'Request'} has already been sent")

        transport = transport or Transport()
        tracer = get_tracer()
        action = self.action

        with tracer.start_as_current_span("mws.send_request") as span:
            self.sign()
            url = self.url()
            self._sent = True

            logger.info("Sending %s to %s%s", action, self.credentials.host, self.endpoint)
            logger.debug("queryString %s", url.split("?", 1)[1])

            start_time = time.time()
            response = await transport.post(url)
            latency_ms = (time.time() - start_time) * 1000

            add_request_span_attributes(
                span,
                action=action,
                endpoint=self.endpoint,
                host=self.credentials.host,
                status_code=response.status_code,
                error_origin=response.origin.value if response.origin else None,
                error_code=response.error_code,
            )

            if response.success:
                span.set_status(Status(StatusCode.OK))
            else:
                span.set_status(Status(StatusCode.ERROR, response.error))
                logger.warning(
                    "%s failed (%s): %s",
                    action,
                    response.origin.value,
                    response.error,
                )

            if metrics is not None:
                metrics.record_request(
                    action=action or "",
                    latency_ms=latency_ms,
                    error_origin=response.origin.value if response.origin else None,
                    error_code=response.error_code,
                    status_code=response.status_code,
                )

            return response
