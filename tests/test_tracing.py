"""Tests for the tracing helpers."""

from unittest.mock import MagicMock

import pytest
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import StatusCode

import mws.tracing as tracing
from mws.tracing import add_request_span_attributes, get_tracer, init_tracing, traced
from mws.transport import ErrorOrigin, MWSResponse


@pytest.fixture
def fresh_tracing(monkeypatch):
    monkeypatch.setattr(tracing, "_tracer", None)
    monkeypatch.setattr(tracing, "_initialized", False)


@pytest.fixture
def exporter(monkeypatch) -> InMemorySpanExporter:
    """Route spans from ``traced`` into memory."""
    span_exporter = InMemorySpanExporter()
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    monkeypatch.setattr(tracing, "get_tracer", lambda: provider.get_tracer("test"))
    return span_exporter


class TestInitTracing:
    """Tests for init_tracing and get_tracer."""

    def test_init_is_cached(self, fresh_tracing):
        first = init_tracing()
        second = init_tracing(service_name="other")

        assert first is second
        assert get_tracer() is first

    def test_get_tracer_initializes(self, fresh_tracing):
        tracer = get_tracer()

        assert tracer is not None
        assert tracing._initialized is True


class TestTraced:
    """Tests for the traced decorator."""

    @pytest.mark.asyncio
    async def test_success_response(self, exporter):
        @traced("mws.test.call")
        async def call():
            return MWSResponse(success=True, data={"ok": ""})

        response = await call()

        assert response.success is True
        (span,) = exporter.get_finished_spans()
        assert span.name == "mws.test.call"
        assert span.status.status_code == StatusCode.OK

    @pytest.mark.asyncio
    async def test_failed_response_marks_span(self, exporter):
        @traced("mws.test.call")
        async def call():
            return MWSResponse(success=False, origin=ErrorOrigin.API, error="Access denied")

        response = await call()

        assert response.error == "Access denied"
        (span,) = exporter.get_finished_spans()
        assert span.status.status_code == StatusCode.ERROR
        assert span.attributes["error.origin"] == "api"

    @pytest.mark.asyncio
    async def test_exception_propagates(self, exporter):
        @traced("mws.test.call")
        async def call():
            raise ValueError("bad options")

        with pytest.raises(ValueError, match="bad options"):
            await call()

        (span,) = exporter.get_finished_spans()
        assert span.status.status_code == StatusCode.ERROR

    def test_keeps_function_name(self):
        @traced("mws.test.call")
        async def list_things():
            return MWSResponse(success=True)

        assert list_things.__name__ == "list_things"


class TestRequestSpanAttributes:
    """Tests for add_request_span_attributes."""

    def test_all_attributes(self):
        span = MagicMock()

        add_request_span_attributes(
            span,
            action="ListOrders",
            endpoint="/Orders/2013-09-01",
            host="mws.amazonservices.de",
            status_code=400,
            error_origin="api",
            error_code="InvalidParameterValue",
        )

        attributes = {c.args[0]: c.args[1] for c in span.set_attribute.call_args_list}
        assert attributes == {
            "mws.action": "ListOrders",
            "mws.endpoint": "/Orders/2013-09-01",
            "mws.host": "mws.amazonservices.de",
            "http.status_code": 400,
            "error.origin": "api",
            "mws.error_code": "InvalidParameterValue",
        }

    def test_missing_values_skipped(self):
        span = MagicMock()

        add_request_span_attributes(span, action="ListOrders", status_code=0)

        span.set_attribute.assert_called_once_with("mws.action", "ListOrders")
