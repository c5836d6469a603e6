from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, Float, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Property(Base):
    """A rental listing belonging to an agency"""
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    agency_id = Column(Integer, ForeignKey("agencies.id", ondelete="CASCADE"), nullable=False, index=True)
    # No ON DELETE rule: a location in use is guarded by the check endpoint
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=True, index=True)

    price = Column(Float, default=0.0)  # Nightly price
    cancellation = Column(Float, default=-1)  # -1 unavailable, 0 free, >0 fee
    available = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    agency = relationship("Agency", back_populates="properties")
    location = relationship("Location", back_populates="properties")
    bookings = relationship("Booking", back_populates="property", cascade="all, delete-orphan")
