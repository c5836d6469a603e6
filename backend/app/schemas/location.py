from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class LocationName(BaseModel):
    language: str = Field(..., min_length=2, max_length=10)
    name: str = Field(..., min_length=1, max_length=255)


class ValidateLocationPayload(LocationName):
    pass


class LocationValueResponse(BaseModel):
    id: int
    language: str
    value: str

    class Config:
        from_attributes = True


class LocationResponse(BaseModel):
    id: int
    name: Optional[str] = None  # Resolved for the requested language
    values: List[LocationValueResponse] = []
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LocationListItem(BaseModel):
    id: int
    name: str
