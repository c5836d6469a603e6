from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session, joinedload, selectinload
from sqlalchemy.exc import SQLAlchemyError
import logging

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import db_error, no_content, rule_error
from app.core.rate_limit import limiter
from app.core.search import contains_keyword, page_offset
from app.models.booking import Booking
from app.models.property import Property
from app.models.location import Location
from app.schemas.agency import AgencySummary
from app.schemas.booking import (
    GetBookingsPayload, BookingResponse, BookingProperty, BookingLocation
)
from app.schemas.common import PageResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def _populated(query):
    return query.options(
        joinedload(Booking.property).joinedload(Property.location).selectinload(Location.values),
        joinedload(Booking.agency),
    )


def _build_booking(booking: Booking, language: str) -> BookingResponse:
    """Flatten a booking with its property, location name and agency"""
    prop = booking.property
    location = None
    if prop.location:
        location = BookingLocation(id=prop.location.id, name=prop.location.name_for(language))

    return BookingResponse(
        id=booking.id,
        from_date=booking.from_date,
        to_date=booking.to_date,
        status=booking.status,
        cancellation=bool(booking.cancellation),
        cancel_request=bool(booking.cancel_request),
        price=booking.price or 0.0,
        user_id=booking.user_id,
        property=BookingProperty(
            id=prop.id,
            name=prop.name,
            cancellation=prop.cancellation if prop.cancellation is not None else -1,
            location=location,
        ),
        agency=AgencySummary.model_validate(booking.agency),
    )


@router.post("/{page}/{size}/{language}", response_model=PageResult[BookingResponse])
def get_bookings(
    payload: GetBookingsPayload,
    page: int = Path(..., ge=1),
    size: int = Path(..., ge=1, le=settings.MAX_PAGE_SIZE),
    language: str = Path(...),
    db: Session = Depends(get_db)
):
    """
    List bookings for a set of agencies and statuses, newest stay first.

    An empty agency or status list matches nothing.
    """
    if not payload.agencies or not payload.statuses:
        return PageResult[BookingResponse]()

    try:
        query = db.query(Booking).join(Property, Booking.property_id == Property.id).filter(
            Booking.agency_id.in_(payload.agencies),
            Booking.status.in_([s.value for s in payload.statuses])
        )

        if payload.property:
            query = query.filter(Booking.property_id == payload.property)
        if payload.user:
            query = query.filter(Booking.user_id == payload.user)

        f = payload.filter
        if f:
            if f.from_date:
                query = query.filter(Booking.from_date >= f.from_date)
            if f.to_date:
                query = query.filter(Booking.to_date <= f.to_date)
            if f.keyword:
                query = query.filter(contains_keyword(Property.name, f.keyword))
            if f.location:
                query = query.filter(Property.location_id == f.location)

        total_records = query.count()
        bookings = _populated(query).order_by(Booking.from_date.desc(), Booking.id.desc()) \
            .offset(page_offset(page, size)).limit(size).all()
    except SQLAlchemyError as e:
        raise db_error("booking.get_bookings", e, payload.model_dump(mode="json"), db)

    return PageResult[BookingResponse](
        result_data=[_build_booking(b, language) for b in bookings],
        total_records=total_records
    )


@router.get("/{booking_id}/{language}", response_model=BookingResponse)
def get_booking(booking_id: int, language: str, db: Session = Depends(get_db)):
    try:
        booking = _populated(db.query(Booking)).filter(Booking.id == booking_id).first()
    except SQLAlchemyError as e:
        raise db_error("booking.get_booking", e, booking_id, db)

    if not booking:
        return no_content("booking.get_booking", f"Booking not found: {booking_id}")
    return _build_booking(booking, language)


@router.post("/cancel/{booking_id}")
@limiter.limit(settings.CANCEL_RATE_LIMIT)
def cancel_booking(request: Request, booking_id: int, db: Session = Depends(get_db)):
    """Record the renter's request to cancel; the agency processes it later"""
    try:
        booking = db.query(Booking).filter(Booking.id == booking_id).first()
        if not booking:
            return no_content("booking.cancel", f"Booking not found: {booking_id}")

        if not booking.can_request_cancellation():
            raise rule_error("booking.cancel", f"Booking {booking_id} cannot be cancelled")

        booking.cancel_request = True
        db.commit()
    except SQLAlchemyError as e:
        raise db_error("booking.cancel", e, booking_id, db)

    logger.info(f"Cancellation requested for booking {booking_id}")
    return {"success": True}
