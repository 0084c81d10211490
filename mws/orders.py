"""
MWS Orders API (2013-09-01).

Usage:
    client = create_mws_client()
    response = await client.orders.list_orders(ListOrdersRequest(
        marketplace_ids=["A1PA6795UKMFR9"],
        created_after=datetime(2024, 1, 1, tzinfo=timezone.utc),
    ))
    if response.success:
        for order in response.data.orders:
            print(order["AmazonOrderId"])
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from .parameters import ListParameter, StringParameter, TimestampParameter
from .results import ListOrderItemsResult, ListOrdersResult
from .tracing import traced
from .transport import MWSResponse

if TYPE_CHECKING:
    from .client import MWSClient


@dataclass
class ListOrdersRequest:
    """Options for ListOrders."""
    marketplace_ids: list[str]
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    last_updated_after: Optional[datetime] = None
    last_updated_before: Optional[datetime] = None
    order_statuses: list[str] = field(default_factory=list)
    fulfillment_channels: list[str] = field(default_factory=list)
    payment_methods: list[str] = field(default_factory=list)
    tfm_shipment_statuses: list[str] = field(default_factory=list)
    seller_order_id: Optional[str] = None
    buyer_email: Optional[str] = None
    max_results_per_page: Optional[int] = None

    def validate(self) -> None:
        if not self.marketplace_ids:
            raise ValueError("ListOrders requires at least one marketplace id")
        if self.created_after is None and self.last_updated_after is None:
            raise ValueError("ListOrders requires created_after or last_updated_after")


@dataclass
class ListOrderItemsRequest:
    """Options for ListOrderItems."""
    amazon_order_id: str

    def validate(self) -> None:
        if not self.amazon_order_id:
            raise ValueError("ListOrderItems requires an amazon_order_id")


class Orders:
    """Callers for the Orders section of MWS."""

    ENDPOINT = "/Orders/2013-09-01"
    VERSION = "2013-09-01"

    def __init__(self, client: "MWSClient"):
        self._client = client

    @traced("mws.orders.list_orders")
    async def list_orders(self, options: ListOrdersRequest) -> MWSResponse:
        """
        List orders created or updated in a time window.

        Returns:
            MWSResponse whose data is a ListOrdersResult on success
        """
        options.validate()
        request = self._client.new_request(self.ENDPOINT)

        request.add_param(StringParameter("Action", "ListOrders"))
        request.add_param(StringParameter("SellerId", self._client.credentials.seller_id))

        timestamps = {
            "CreatedAfter": options.created_after,
            "CreatedBefore": options.created_before,
            "LastUpdatedAfter": options.last_updated_after,
            "LastUpdatedBefore": options.last_updated_before,
        }
        for key, value in timestamps.items():
            if value is not None:
                request.add_param(TimestampParameter(key, value))

        request.add_param(ListParameter("MarketplaceId.Id", options.marketplace_ids))
        request.add_param(ListParameter("OrderStatus.Status", options.order_statuses))
        request.add_param(ListParameter("FulfillmentChannel.Channel", options.fulfillment_channels))
        request.add_param(ListParameter("PaymentMethod.Method", options.payment_methods))
        request.add_param(ListParameter("TFMShipmentStatus.Status", options.tfm_shipment_statuses))

        if options.seller_order_id:
            request.add_param(StringParameter("SellerOrderId", options.seller_order_id))
        if options.buyer_email:
            request.add_param(StringParameter("BuyerEmail", options.buyer_email))
        if options.max_results_per_page is not None:
            request.add_param(StringParameter("MaxResultsPerPage", options.max_results_per_page))

        request.add_param(StringParameter("Version", self.VERSION))

        response = await self._client.send(request)
        if response.success:
            return replace(response, data=ListOrdersResult.from_response(response.data))
        return response

    @traced("mws.orders.list_order_items")
    async def list_order_items(self, options: ListOrderItemsRequest) -> MWSResponse:
        """
        List the items of one order.

        Returns:
            MWSResponse whose data is a ListOrderItemsResult on success
        """
        options.validate()
        request = self._client.new_request(self.ENDPOINT)

        request.add_param(StringParameter("Action", "ListOrderItems"))
        request.add_param(StringParameter("SellerId", self._client.credentials.seller_id))
        request.add_param(StringParameter("Version", self.VERSION))
        request.add_param(StringParameter("AmazonOrderId", options.amazon_order_id))

        response = await self._client.send(request)
        if response.success:
            return replace(response, data=ListOrderItemsResult.from_response(response.data))
        return response
