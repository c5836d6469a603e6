from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Agency(Base):
    """Property-management company that owns listings and receives bookings"""
    __tablename__ = "agencies"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=True)
    phone = Column(String(50), nullable=True)
    avatar = Column(String(255), nullable=True)  # File name on the CDN
    bio = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    properties = relationship("Property", back_populates="agency", cascade="all, delete-orphan")
    bookings = relationship("Booking", back_populates="agency", cascade="all, delete-orphan")
