from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, Boolean
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base
from datetime import date, datetime
from typing import Optional, Union
import enum
from pydantic import TypeAdapter


# Accepts ISO strings with a "Z" suffix on every supported Python
_datetime_adapter = TypeAdapter(datetime)


class BookingStatus(str, enum.Enum):
    VOID = "void"              # Abandoned before payment
    PENDING = "pending"        # Awaiting payment
    DEPOSIT = "deposit"        # Deposit received
    PAID = "paid"              # Fully paid
    RESERVED = "reserved"      # Held by the agency
    CANCELLED = "cancelled"


def _as_date(value: Union[date, datetime, str]) -> date:
    if isinstance(value, str):
        value = _datetime_adapter.validate_python(value)
    if isinstance(value, datetime):
        return value.date()
    return value


def cancellation_allowed(
    cancellation: bool,
    cancel_request: bool,
    status: str,
    from_date: Union[date, datetime, str],
    today: Optional[date] = None,
) -> bool:
    """
    A renter may ask to cancel only when the booking was made with the
    cancellation option, no request is pending, it is not already cancelled
    and it has not started yet (starting today still counts).
    """
    if not cancellation or cancel_request:
        return False
    if status == BookingStatus.CANCELLED.value:
        return False
    today = today or date.today()
    return _as_date(from_date) >= today


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    agency_id = Column(Integer, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    from_date = Column(DateTime(timezone=True), nullable=False, index=True)
    to_date = Column(DateTime(timezone=True), nullable=False)

    status = Column(String(50), default=BookingStatus.PENDING.value, nullable=False, index=True)

    cancellation = Column(Boolean, default=False)  # Renter paid for the cancellation option
    cancel_request = Column(Boolean, default=False)  # Renter asked to cancel

    price = Column(Float, default=0.0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    property = relationship("Property", back_populates="bookings")
    agency = relationship("Agency", back_populates="bookings")
    user = relationship("User", back_populates="bookings")

    def can_request_cancellation(self, today: Optional[date] = None) -> bool:
        return cancellation_allowed(
            self.cancellation, self.cancel_request, self.status, self.from_date, today
        )
