"""
Custom CloudWatch metrics for the MWS client.

This module provides CloudWatch metrics emission using the Embedded Metric Format (EMF)
for efficient metric publishing without requiring explicit PutMetricData API calls.

One EMF record is written per MWS request, carrying the request count, the
latency and a counter for the outcome (success, transport, parse or api error).
"""

import json
import logging
import os
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


class MetricUnit(str, Enum):
    """CloudWatch metric units."""
    COUNT = "Count"
    MILLISECONDS = "Milliseconds"


class MWSMetricName(str, Enum):
    """Metric names for MWS requests."""
    REQUEST_COUNT = "MWSRequestCount"
    REQUEST_SUCCESS = "MWSRequestSuccess"
    REQUEST_LATENCY = "MWSRequestLatency"
    TRANSPORT_ERROR = "MWSTransportError"
    PARSE_ERROR = "MWSParseError"
    API_ERROR = "MWSApiError"


_ORIGIN_METRICS = {
    "transport": MWSMetricName.TRANSPORT_ERROR,
    "parse": MWSMetricName.PARSE_ERROR,
    "api": MWSMetricName.API_ERROR,
}


@dataclass
class MetricDimensions:
    """Dimensions for CloudWatch metrics."""
    environment: str = field(default_factory=lambda: os.getenv("ENVIRONMENT", "development"))
    action: Optional[str] = None
    error_origin: Optional[str] = None
    error_code: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary, excluding None values."""
        result = {"Environment": self.environment}
        if self.action:
            result["Action"] = self.action
        if self.error_origin:
            result["ErrorOrigin"] = self.error_origin
        if self.error_code:
            result["ErrorCode"] = self.error_code
        return result


class MetricsEmitter:
    """
    CloudWatch metrics emitter using Embedded Metric Format (EMF).

    EMF allows publishing metrics by simply logging JSON in a specific format.
    CloudWatch automatically extracts metrics from these logs.
    """

    NAMESPACE = "MWSClient"

    def __init__(self, service_name: str = "mws-client"):
        self.service_name = service_name
        self._dimensions = MetricDimensions()

    def _create_emf_log(
        self,
        metrics: dict[str, tuple[float, MetricUnit]],
        dimensions: Optional[MetricDimensions] = None,
        properties: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Create an EMF-formatted log entry.

        Args:
            metrics: Dictionary of metric name to (value, unit) tuples
            dimensions: Optional custom dimensions
            properties: Additional properties to include in the log

        Returns:
            EMF-formatted dictionary
        """
        dims = dimensions or self._dimensions
        dim_dict = dims.to_dict()

        metrics_array = [
            {"Name": name, "Unit": unit.value}
            for name, (_, unit) in metrics.items()
        ]

        emf_log: dict[str, Any] = {
            "_aws": {
                "Timestamp": int(time.time() * 1000),
                "CloudWatchMetrics": [
                    {
                        "Namespace": self.NAMESPACE,
                        "Dimensions": [list(dim_dict.keys())],
                        "Metrics": metrics_array,
                    }
                ],
            },
            "service": self.service_name,
            **dim_dict,
        }

        for name, (value, _) in metrics.items():
            emf_log[name] = value

        if properties:
            emf_log.update(properties)

        return emf_log

    def emit_multiple(
        self,
        metrics: dict[MWSMetricName, tuple[float, MetricUnit]],
        dimensions: Optional[MetricDimensions] = None,
        properties: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Emit multiple metrics in a single log entry.

        Args:
            metrics: Dictionary of metric name to (value, unit) tuples
            dimensions: Optional custom dimensions
            properties: Additional properties to log
        """
        metrics_dict = {name.value: value_unit for name, value_unit in metrics.items()}
        emf_log = self._create_emf_log(metrics_dict, dimensions, properties)
        # Print to stdout for CloudWatch to pick up
        print(json.dumps(emf_log))

    def record_request(
        self,
        action: str,
        latency_ms: float,
        error_origin: Optional[str] = None,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        """
        Record the outcome of one MWS request.

        Args:
            action: MWS action name
            latency_ms: Round-trip time in milliseconds
            error_origin: "transport", "parse" or "api"; None on success
            error_code: Error code reported by MWS
            status_code: HTTP status code, if a response arrived
        """
        dims = MetricDimensions(
            action=action,
            error_origin=error_origin,
            error_code=error_code[:50] if error_code else None,
        )

        metrics: dict[MWSMetricName, tuple[float, MetricUnit]] = {
            MWSMetricName.REQUEST_COUNT: (1, MetricUnit.COUNT),
            MWSMetricName.REQUEST_LATENCY: (latency_ms, MetricUnit.MILLISECONDS),
        }

        if error_origin is None:
            metrics[MWSMetricName.REQUEST_SUCCESS] = (1, MetricUnit.COUNT)
        elif error_origin in _ORIGIN_METRICS:
            metrics[_ORIGIN_METRICS[error_origin]] = (1, MetricUnit.COUNT)
        else:
            logger.warning("Unknown error origin %r for %s", error_origin, action)

        properties: dict[str, Any] = {"action": action}
        if status_code:
            properties["statusCode"] = status_code

        self.emit_multiple(metrics, dims, properties)


# Global metrics emitter instance
_metrics_emitter: Optional[MetricsEmitter] = None


def get_metrics_emitter() -> MetricsEmitter:
    """Get the global metrics emitter instance."""
    global _metrics_emitter
    if _metrics_emitter is None:
        _metrics_emitter = MetricsEmitter()
    return _metrics_emitter
