from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AgencySummary(BaseModel):
    id: int
    full_name: str
    avatar: Optional[str] = None

    class Config:
        from_attributes = True


class AgencyResponse(AgencySummary):
    email: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
