from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Location(Base):
    """A place a property can be listed under, named once per language"""
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Values are owned by the location and removed with it
    values = relationship(
        "LocationValue",
        back_populates="location",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="LocationValue.id",
    )
    properties = relationship("Property", back_populates="location")

    def value_for(self, language: str):
        """Return the LocationValue for a language, or None"""
        for value in self.values:
            if value.language == language:
                return value
        return None

    def name_for(self, language: str):
        value = self.value_for(language)
        return value.value if value else None


class LocationValue(Base):
    __tablename__ = "location_values"

    id = Column(Integer, primary_key=True, index=True)
    location_id = Column(
        Integer,
        ForeignKey("locations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    language = Column(String(10), nullable=False, index=True)
    value = Column(String(255), nullable=False, index=True)

    location = relationship("Location", back_populates="values")
