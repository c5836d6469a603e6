from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import func
import logging

from app.core.config import settings
from app.core.database import get_db
from app.core.errors import db_error, no_content
from app.core.search import contains_keyword, page_offset
from app.models.agency import Agency
from app.schemas.agency import AgencyResponse
from app.schemas.common import PageResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/agencies", tags=["Agencies"])


@router.get("/{page}/{size}", response_model=PageResult[AgencyResponse])
def get_agencies(
    page: int = Path(..., ge=1),
    size: int = Path(..., ge=1, le=settings.MAX_PAGE_SIZE),
    s: str = Query("", description="Keyword searched in the agency name"),
    db: Session = Depends(get_db)
):
    """List active agencies by name"""
    try:
        query = db.query(Agency).filter(Agency.is_active == True)
        if s:
            query = query.filter(contains_keyword(Agency.full_name, s))

        total_records = query.count()
        agencies = query.order_by(func.lower(Agency.full_name), Agency.id) \
            .offset(page_offset(page, size)).limit(size).all()
    except SQLAlchemyError as e:
        raise db_error("agency.get_agencies", e, s, db)

    return PageResult[AgencyResponse](
        result_data=[AgencyResponse.model_validate(a) for a in agencies],
        total_records=total_records
    )


@router.get("/{agency_id}", response_model=AgencyResponse)
def get_agency(agency_id: int, db: Session = Depends(get_db)):
    try:
        agency = db.query(Agency).filter(Agency.id == agency_id).first()
    except SQLAlchemyError as e:
        raise db_error("agency.get_agency", e, agency_id, db)

    if not agency:
        return no_content("agency.get_agency", f"Agency not found: {agency_id}")
    return agency


@router.delete("/{agency_id}")
def delete_agency(agency_id: int, db: Session = Depends(get_db)):
    """Delete an agency along with its properties and their bookings"""
    try:
        agency = db.query(Agency).filter(Agency.id == agency_id).first()
        if not agency:
            return no_content("agency.delete", f"Agency {agency_id} not found")

        property_count = len(agency.properties)
        db.delete(agency)
        db.commit()
    except SQLAlchemyError as e:
        raise db_error("agency.delete", e, agency_id, db)

    logger.info(f"Deleted agency {agency_id} and {property_count} properties")
    return {"success": True}
