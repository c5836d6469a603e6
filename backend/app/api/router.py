from fastapi import APIRouter
from app.api.endpoints import locations, agencies, bookings

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(locations.router)
api_router.include_router(agencies.router)
api_router.include_router(bookings.router)
