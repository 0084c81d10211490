"""Tests for the custom metrics module."""

import json

from mws.metrics import (
    MetricDimensions,
    MetricsEmitter,
    MetricUnit,
    MWSMetricName,
    get_metrics_emitter,
)


class TestMetricDimensions:
    """Tests for MetricDimensions dataclass."""

    def test_default_dimensions(self):
        result = MetricDimensions(environment="test").to_dict()

        assert result == {"Environment": "test"}

    def test_custom_dimensions(self):
        dims = MetricDimensions(
            environment="production",
            action="ListOrders",
            error_origin="api",
            error_code="RequestThrottled",
        )

        assert dims.to_dict() == {
            "Environment": "production",
            "Action": "ListOrders",
            "ErrorOrigin": "api",
            "ErrorCode": "RequestThrottled",
        }


class TestMetricsEmitter:
    """Tests for MetricsEmitter class."""

    def test_emit_multiple_metrics(self, capsys):
        emitter = MetricsEmitter(service_name="test-service")

        emitter.emit_multiple({
            MWSMetricName.REQUEST_COUNT: (1, MetricUnit.COUNT),
            MWSMetricName.REQUEST_LATENCY: (150.5, MetricUnit.MILLISECONDS),
        })

        output = json.loads(capsys.readouterr().out.strip())

        assert output["_aws"]["CloudWatchMetrics"][0]["Namespace"] == "MWSClient"
        assert output["MWSRequestCount"] == 1
        assert output["MWSRequestLatency"] == 150.5
        assert output["service"] == "test-service"

        metric_names = [m["Name"] for m in output["_aws"]["CloudWatchMetrics"][0]["Metrics"]]
        assert metric_names == ["MWSRequestCount", "MWSRequestLatency"]

    def test_record_request_success(self, capsys):
        MetricsEmitter().record_request("ListOrders", latency_ms=42.0, status_code=200)

        output = json.loads(capsys.readouterr().out.strip())

        assert output["MWSRequestCount"] == 1
        assert output["MWSRequestSuccess"] == 1
        assert output["MWSRequestLatency"] == 42.0
        assert output["Action"] == "ListOrders"
        assert output["statusCode"] == 200
        assert "ErrorOrigin" not in output
        assert "MWSApiError" not in output

    def test_record_request_transport_error(self, capsys):
        MetricsEmitter().record_request("RequestReport", latency_ms=5.0, error_origin="transport")

        output = json.loads(capsys.readouterr().out.strip())

        assert output["MWSTransportError"] == 1
        assert output["ErrorOrigin"] == "transport"
        assert "MWSRequestSuccess" not in output
        assert "statusCode" not in output

    def test_record_request_parse_error(self, capsys):
        MetricsEmitter().record_request("ListOrders", latency_ms=1.0, error_origin="parse", status_code=502)

        output = json.loads(capsys.readouterr().out.strip())

        assert output["MWSParseError"] == 1

    def test_error_code_truncated(self, capsys):
        MetricsEmitter().record_request(
            "ListOrders", latency_ms=1.0, error_origin="api", error_code="X" * 80
        )

        output = json.loads(capsys.readouterr().out.strip())

        assert output["MWSApiError"] == 1
        assert len(output["ErrorCode"]) == 50

    def test_dimensions_declared(self, capsys):
        MetricsEmitter().record_request("ListOrders", latency_ms=1.0, error_origin="api", error_code="E")

        output = json.loads(capsys.readouterr().out.strip())

        dimensions = output["_aws"]["CloudWatchMetrics"][0]["Dimensions"][0]
        assert dimensions == ["Environment", "Action", "ErrorOrigin", "ErrorCode"]


class TestGlobalEmitter:
    """Tests for the global emitter helpers."""

    def test_default_service_name(self):
        assert get_metrics_emitter().service_name == "mws-client"

    def test_get_metrics_emitter_is_cached(self):
        assert get_metrics_emitter() is get_metrics_emitter()
