from app.schemas.common import PageResult
from app.schemas.location import (
    LocationName, ValidateLocationPayload, LocationValueResponse,
    LocationResponse, LocationListItem
)
from app.schemas.agency import AgencySummary, AgencyResponse
from app.schemas.booking import (
    BookingFilter, GetBookingsPayload, BookingLocation, BookingProperty, BookingResponse
)

__all__ = [
    "PageResult",
    # Location
    "LocationName", "ValidateLocationPayload", "LocationValueResponse",
    "LocationResponse", "LocationListItem",
    # Agency
    "AgencySummary", "AgencyResponse",
    # Booking
    "BookingFilter", "GetBookingsPayload", "BookingLocation", "BookingProperty", "BookingResponse",
]
