"""MWS Reports API (2009-01-01)."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from .parameters import ListParameter, StringParameter, TimestampParameter
from .results import RequestReportResult
from .tracing import traced
from .transport import MWSResponse

if TYPE_CHECKING:
    from .client import MWSClient


@dataclass
class RequestReportRequest:
    """Options for RequestReport."""
    report_type: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    report_options: Optional[str] = None
    marketplace_ids: Optional[list[str]] = None

    def validate(self) -> None:
        if not self.report_type:
            raise ValueError("RequestReport requires a report_type")


class Reports:
    """Callers for the Reports section of MWS."""

    ENDPOINT = "/"
    VERSION = "2009-01-01"

    def __init__(self, client: "MWSClient"):
        self._client = client

    @traced("mws.reports.request_report")
    async def request_report(self, options: RequestReportRequest) -> MWSResponse:
        """
        Ask MWS to generate a report.

        Returns:
            MWSResponse whose data is a RequestReportResult on success
        """
        options.validate()
        request = self._client.new_request(self.ENDPOINT)

        request.add_param(StringParameter("Action", "RequestReport"))
        request.add_param(StringParameter("Merchant", self._client.credentials.seller_id))
        request.add_param(StringParameter("Version", self.VERSION))
        request.add_param(StringParameter("ReportType", options.report_type))

        if options.start_date is not None:
            request.add_param(TimestampParameter("StartDate", options.start_date))
        if options.end_date is not None:
            request.add_param(TimestampParameter("EndDate", options.end_date))
        if options.report_options is not None:
            request.add_param(StringParameter("ReportOptions", options.report_options))
        if options.marketplace_ids is not None:
            request.add_param(ListParameter("MarketplaceIdList.Id", options.marketplace_ids))

        response = await self._client.send(request)
        if response.success:
            return replace(response, data=RequestReportResult.from_response(response.data))
        return response
