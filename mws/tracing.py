"""OpenTelemetry tracing for the MWS client.

Two kinds of span are produced:
- one span per endpoint call (``mws.orders.list_orders`` ...), via ``traced``
- one ``mws.send_request`` span per signed request, opened in ``Request.send``

Exporters are chosen from MWSConfig: OTLP when an endpoint is configured,
console output when OTEL_CONSOLE_EXPORT is set.
"""

import os
from functools import wraps
from typing import Awaitable, Callable, ParamSpec

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.trace import Status, StatusCode

from .transport import MWSResponse

P = ParamSpec("P")

_tracer: trace.Tracer | None = None
_initialized = False


def init_tracing(
    service_name: str = "mws-client",
    otlp_endpoint: str | None = None,
    enable_console_export: bool = False,
) -> trace.Tracer:
    """Install a tracer provider for the MWS client.

    Only the first call configures exporters; later calls return the same tracer.

    Args:
        service_name: Reported as ``service.name``
        otlp_endpoint: OTLP gRPC collector (e.g. "http://localhost:4317")
        enable_console_export: Also print finished spans to stdout

    Returns:
        Tracer used for MWS spans
    """
    global _tracer, _initialized

    if _initialized and _tracer is not None:
        return _tracer

    provider = TracerProvider(resource=Resource.create({
        SERVICE_NAME: service_name,
        "service.version": "0.1.0",
        "deployment.environment": os.getenv("ENVIRONMENT", "development"),
    }))

    if otlp_endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=otlp_endpoint, insecure=True))
        )
    if enable_console_export:
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)

    _tracer = trace.get_tracer(service_name)
    _initialized = True
    return _tracer


def get_tracer() -> trace.Tracer:
    """Return the MWS tracer, installing a provider without exporters if needed."""
    if _tracer is None:
        return init_tracing()
    return _tracer


def traced(
    span_name: str,
) -> Callable[[Callable[P, Awaitable[MWSResponse]]], Callable[P, Awaitable[MWSResponse]]]:
    """Wrap an async endpoint call in a span named ``span_name``.

    The span status follows the returned MWSResponse: an unsuccessful response
    marks the span as an error even though nothing was raised.
    """
    def decorator(
        func: Callable[P, Awaitable[MWSResponse]],
    ) -> Callable[P, Awaitable[MWSResponse]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> MWSResponse:
            with get_tracer().start_as_current_span(span_name) as span:
                try:
                    response = await func(*args, **kwargs)
                except Exception as e:
                    span.set_status(Status(StatusCode.ERROR, str(e)))
                    span.record_exception(e)
                    raise

                if response.success:
                    span.set_status(Status(StatusCode.OK))
                else:
                    span.set_attribute("error.origin", response.origin.value)
                    span.set_status(Status(StatusCode.ERROR, response.error))
                return response

        return wrapper

    return decorator


def add_request_span_attributes(
    span: trace.Span,
    action: str | None = None,
    endpoint: str | None = None,
    host: str | None = None,
    status_code: int | None = None,
    error_origin: str | None = None,
    error_code: str | None = None,
) -> None:
    """Add MWS request attributes to a span.

    Args:
        span: The span to add attributes to
        action: MWS action name (e.g. "ListOrders")
        endpoint: Request path
        host: MWS host
        status_code: HTTP status code of the response
        error_origin: "transport", "parse" or "api" when the call failed
        error_code: Error code reported by MWS
    """
    if action:
        span.set_attribute("mws.action", action)
    if endpoint:
        span.set_attribute("mws.endpoint", endpoint)
    if host:
        span.set_attribute("mws.host", host)
    if status_code:
        span.set_attribute("http.status_code", status_code)
    if error_origin:
        span.set_attribute("error.origin", error_origin)
    if error_code:
        span.set_attribute("mws.error_code", error_code)
