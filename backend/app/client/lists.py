import logging
import httpx
from datetime import date
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.client.api import ApiError, RentalApiClient, empty_page
from app.client.pagination import PaginatedList
from app.models.booking import cancellation_allowed

logger = logging.getLogger(__name__)

# Marks a criterion left unchanged by set_criteria
_KEEP = object()


class AgencyList(PaginatedList):
    """Searchable agency list with delete"""

    def __init__(self, client: RentalApiClient, **kwargs):
        super().__init__(client.get_agencies, **kwargs)
        self._client = client

    async def delete(self, index: int) -> bool:
        if index < 0 or index >= len(self.rows):
            self._report(ValueError(f"No agency at index {index}"))
            return False

        agency_id = self.rows[index]["id"]
        try:
            status = await self._client.delete_agency(agency_id)
        except (ApiError, httpx.HTTPError) as e:
            self._report(e)
            return False

        if status != 200:
            self._report(ApiError(status, f"Agency {agency_id} was not deleted"))
            return False

        self.remove(index)
        return True

    def _report(self, err: Exception):
        logger.error(f"Agency list error: {err}")
        if self._on_error:
            self._on_error(err)


class BookingList(PaginatedList):
    """
    Bookings of a set of agencies and statuses, with the renter's
    two-step cancellation request.
    """

    def __init__(
        self,
        client: RentalApiClient,
        agencies: Optional[List[int]] = None,
        statuses: Optional[List[str]] = None,
        filter: Optional[Dict[str, Any]] = None,
        property: Optional[int] = None,
        user: Optional[int] = None,
        language: Optional[str] = None,
        page_size: Optional[int] = None,
        **kwargs
    ):
        super().__init__(self._load_bookings, page_size=page_size or settings.BOOKINGS_PAGE_SIZE, **kwargs)
        self._client = client
        self.agencies = agencies
        self.statuses = statuses
        self.filter = filter
        self.property = property
        self.user = user
        self.language = language or settings.DEFAULT_LANGUAGE

        self.selected_id: Optional[int] = None
        self.cancel_dialog_open = False
        self.cancel_request_processing = False
        self.cancel_request_sent = False

    def payload(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"agencies": self.agencies or [], "statuses": self.statuses or []}
        if self.filter:
            data["filter"] = self.filter
        if self.property:
            data["property"] = self.property
        if self.user:
            data["user"] = self.user
        return data

    async def _load_bookings(self, keyword: str, page: int, size: int):
        if not self.agencies or not self.statuses:
            return empty_page()
        return await self._client.get_bookings(self.payload(), page, size, self.language)

    async def set_criteria(self, agencies=_KEEP, statuses=_KEEP, filter=_KEEP) -> bool:
        """New agencies, statuses or filter always restart from page 1"""
        if agencies is not _KEEP:
            self.agencies = agencies
        if statuses is not _KEEP:
            self.statuses = statuses
        if filter is not _KEEP:
            self.filter = filter
        self.rows = []
        self.page = 1
        return await self.load(1)

    async def set_keyword(self, keyword: str) -> bool:
        """The keyword searches property names through the booking filter"""
        keyword = keyword or ""
        if keyword == self.keyword and not self.init:
            return False
        filter = dict(self.filter or {})
        if keyword:
            filter["keyword"] = keyword
        else:
            filter.pop("keyword", None)
        self.filter = filter or None
        return await super().set_keyword(keyword)

    def can_cancel(self, row: Dict[str, Any], today: Optional[date] = None) -> bool:
        return cancellation_allowed(
            row.get("cancellation", False),
            row.get("cancel_request", False),
            row.get("status"),
            row["from_date"],
            today,
        )

    def request_cancel(self, booking_id: int, today: Optional[date] = None) -> bool:
        """First step: open the confirmation for an eligible booking"""
        row = next((r for r in self.rows if r["id"] == booking_id), None)
        if row is None or not self.can_cancel(row, today):
            return False
        self.selected_id = booking_id
        self.cancel_request_sent = False
        self.cancel_dialog_open = True
        return True

    async def confirm_cancel(self) -> bool:
        """Second step: send the request and mark the row without refetching"""
        booking_id = self.selected_id
        if booking_id is None:
            return False

        self.cancel_request_processing = True
        try:
            status = await self._client.cancel_booking(booking_id)
        except (ApiError, httpx.HTTPError) as e:
            self._fail(e)
            return False

        if status != 200:
            self._fail(ApiError(status, f"Cancellation request for booking {booking_id} failed"))
            return False

        # The row may have left the current page since the dialog opened
        self.replace_row(lambda r: r["id"] == booking_id, {"cancel_request": True})

        self.cancel_request_sent = True
        self.cancel_request_processing = False
        self.selected_id = None
        return True

    def close_cancel_dialog(self):
        self.cancel_dialog_open = False
        self.cancel_request_sent = False

    def _fail(self, err: Exception):
        logger.error(f"Booking cancellation error: {err}")
        self.cancel_dialog_open = False
        self.cancel_request_processing = False
        if self._on_error:
            self._on_error(err)
