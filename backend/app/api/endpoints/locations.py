from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func
from typing import List
import logging

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import db_error, no_content
from app.core.search import contains_keyword, equals_ignore_case, page_offset
from app.models.location import Location, LocationValue
from app.models.property import Property
from app.schemas.common import PageResult
from app.schemas.location import (
    LocationName, ValidateLocationPayload, LocationResponse, LocationListItem
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/locations", tags=["Locations"])


def _to_response(location: Location, language: str) -> LocationResponse:
    response = LocationResponse.model_validate(location)
    response.name = location.name_for(language)
    return response


@router.post("/validate")
def validate_location(payload: ValidateLocationPayload, db: Session = Depends(get_db)):
    """Check whether a name is free in a language: 200 when free, 204 when taken"""
    try:
        existing = db.query(LocationValue).filter(
            LocationValue.language == payload.language,
            equals_ignore_case(LocationValue.value, payload.name)
        ).first()
    except SQLAlchemyError as e:
        raise db_error("location.validate", e, payload.name, db)

    if existing:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(status_code=status.HTTP_200_OK)


@router.post("", response_model=LocationResponse)
def create_location(names: List[LocationName], db: Session = Depends(get_db)):
    """Create a location with one value per language"""
    try:
        location = Location()
        for name in names:
            location.values.append(LocationValue(language=name.language, value=name.name))
        db.add(location)
        db.commit()
        db.refresh(location)
    except SQLAlchemyError as e:
        raise db_error("location.create", e, [n.model_dump() for n in names], db)

    logger.info(f"Created location {location.id} with {len(names)} values")
    return _to_response(location, settings.DEFAULT_LANGUAGE)


@router.put("/{location_id}", response_model=LocationResponse)
def update_location(location_id: int, names: List[LocationName], db: Session = Depends(get_db)):
    """Update names per language, adding languages the location does not have yet"""
    try:
        location = db.query(Location).filter(Location.id == location_id).first()
        if not location:
            return no_content("location.update", f"Location not found: {location_id}")

        for name in names:
            value = location.value_for(name.language)
            if value:
                value.value = name.name
            else:
                location.values.append(LocationValue(language=name.language, value=name.name))

        db.commit()
        db.refresh(location)
    except SQLAlchemyError as e:
        raise db_error("location.update", e, location_id, db)

    return _to_response(location, settings.DEFAULT_LANGUAGE)


@router.delete("/{location_id}")
def delete_location(location_id: int, db: Session = Depends(get_db)):
    """Delete a location together with all of its values"""
    try:
        location = db.query(Location).filter(Location.id == location_id).first()
        if not location:
            return no_content("location.delete", f"Location {location_id} not found")

        value_count = len(location.values)
        db.delete(location)
        db.commit()
    except SQLAlchemyError as e:
        raise db_error("location.delete", e, location_id, db)

    logger.info(f"Deleted location {location_id} and {value_count} values")
    return {"success": True}


@router.get("/check/{location_id}")
def check_location(location_id: int, db: Session = Depends(get_db)):
    """200 when at least one property uses the location, 204 otherwise"""
    try:
        used = db.query(Property.id).filter(Property.location_id == location_id).first()
    except SQLAlchemyError as e:
        raise db_error("location.check", e, location_id, db)

    if used:
        return Response(status_code=status.HTTP_200_OK)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{location_id}/{language}", response_model=LocationResponse)
def get_location(location_id: int, language: str, db: Session = Depends(get_db)):
    try:
        location = db.query(Location).filter(Location.id == location_id).first()
    except SQLAlchemyError as e:
        raise db_error("location.get_location", e, location_id, db)

    if not location:
        return no_content("location.get_location", f"Location not found: {location_id}")
    return _to_response(location, language)


@router.get("/{page}/{size}/{language}", response_model=PageResult[LocationListItem])
def get_locations(
    page: int = Path(..., ge=1),
    size: int = Path(..., ge=1, le=settings.MAX_PAGE_SIZE),
    language: str = Path(...),
    s: str = Query("", description="Keyword searched in the location name"),
    db: Session = Depends(get_db)
):
    """
    Search locations by their name in one language.

    Locations without a value in that language are left out. Results are
    sorted by name, ignoring case.
    """
    try:
        query = db.query(Location.id, LocationValue.value).join(
            LocationValue, LocationValue.location_id == Location.id
        ).filter(LocationValue.language == language)

        if s:
            query = query.filter(contains_keyword(LocationValue.value, s))

        total_records = query.count()
        rows = query.order_by(func.lower(LocationValue.value), Location.id) \
            .offset(page_offset(page, size)).limit(size).all()
    except SQLAlchemyError as e:
        raise db_error("location.get_locations", e, s, db)

    return PageResult[LocationListItem](
        result_data=[LocationListItem(id=row[0], name=row[1]) for row in rows],
        total_records=total_records
    )
