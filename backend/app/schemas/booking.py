from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from app.models.booking import BookingStatus
from app.schemas.agency import AgencySummary


class BookingFilter(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: Optional[datetime] = Field(None, alias="from")
    to_date: Optional[datetime] = Field(None, alias="to")
    keyword: Optional[str] = None  # Matched against the property name
    location: Optional[int] = None


class GetBookingsPayload(BaseModel):
    agencies: List[int]
    statuses: List[BookingStatus]
    filter: Optional[BookingFilter] = None
    property: Optional[int] = None
    user: Optional[int] = None


class BookingLocation(BaseModel):
    id: int
    name: Optional[str] = None


class BookingProperty(BaseModel):
    id: int
    name: str
    cancellation: float
    location: Optional[BookingLocation] = None


class BookingResponse(BaseModel):
    id: int
    from_date: datetime
    to_date: datetime
    status: str
    cancellation: bool
    cancel_request: bool
    price: float
    user_id: Optional[int] = None
    property: BookingProperty
    agency: AgencySummary
