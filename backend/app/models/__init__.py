from app.models.user import User
from app.models.agency import Agency
from app.models.location import Location, LocationValue
from app.models.property import Property
from app.models.booking import Booking, BookingStatus, cancellation_allowed

__all__ = [
    "User",
    "Agency",
    "Location",
    "LocationValue",
    "Property",
    "Booking",
    "BookingStatus",
    "cancellation_allowed",
]
