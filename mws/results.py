"""Typed results for the MWS endpoint callers."""

from dataclasses import dataclass, field
from typing import Any, Optional


def as_list(value: Any) -> list:
    """Normalize a parsed XML node that may hold zero, one or many items."""
    if value is None or value == "":
        return []
    if isinstance(value, list):
        return value
    return [value]


def _unwrap(data: dict[str, Any], response_tag: str, result_tag: str) -> tuple[dict, dict]:
    response = data.get(response_tag) or {}
    if not isinstance(response, dict):
        response = {}
    result = response.get(result_tag) or {}
    if not isinstance(result, dict):
        result = {}
    return response, result


def _request_id(response: dict[str, Any]) -> Optional[str]:
    metadata = response.get("ResponseMetadata")
    if isinstance(metadata, dict):
        return metadata.get("RequestId")
    return None


def _items(container: Any, item_tag: str) -> list:
    if isinstance(container, dict):
        return as_list(container.get(item_tag))
    return []


@dataclass
class ListOrdersResult:
    """Result of a ListOrders call."""
    orders: list[dict[str, Any]] = field(default_factory=list)
    next_token: Optional[str] = None
    created_before: Optional[str] = None
    last_updated_before: Optional[str] = None
    request_id: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "ListOrdersResult":
        response, result = _unwrap(data, "ListOrdersResponse", "ListOrdersResult")
        return cls(
            orders=_items(result.get("Orders"), "Order"),
            next_token=result.get("NextToken"),
            created_before=result.get("CreatedBefore"),
            last_updated_before=result.get("LastUpdatedBefore"),
            request_id=_request_id(response),
            raw=data,
        )


@dataclass
class ListOrderItemsResult:
    """Result of a ListOrderItems call."""
    amazon_order_id: Optional[str] = None
    order_items: list[dict[str, Any]] = field(default_factory=list)
    next_token: Optional[str] = None
    request_id: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "ListOrderItemsResult":
        response, result = _unwrap(data, "ListOrderItemsResponse", "ListOrderItemsResult")
        return cls(
            amazon_order_id=result.get("AmazonOrderId"),
            order_items=_items(result.get("OrderItems"), "OrderItem"),
            next_token=result.get("NextToken"),
            request_id=_request_id(response),
            raw=data,
        )


@dataclass
class RequestReportResult:
    """Result of a RequestReport call."""
    report_request_id: Optional[str] = None
    report_type: Optional[str] = None
    report_processing_status: Optional[str] = None
    submitted_date: Optional[str] = None
    request_id: Optional[str] = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: dict[str, Any]) -> "RequestReportResult":
        response, result = _unwrap(data, "RequestReportResponse", "RequestReportResult")
        info = result.get("ReportRequestInfo")
        if not isinstance(info, dict):
            info = {}
        return cls(
            report_request_id=info.get("ReportRequestId"),
            report_type=info.get("ReportType"),
            report_processing_status=info.get("ReportProcessingStatus"),
            submitted_date=info.get("SubmittedDate"),
            request_id=_request_id(response),
            raw=data,
        )
