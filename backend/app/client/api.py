"""
Async HTTP client for the list and cancellation endpoints.

Pages come back as plain dicts shaped like ``{"result_data": [...],
"total_records": n}``. Single-object calls return None on 204.
"""
import httpx
from typing import Any, Dict, List, Optional

from app.core.config import settings


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str = ""):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


def empty_page() -> Dict[str, Any]:
    return {"result_data": [], "total_records": 0}


class RentalApiClient:
    def __init__(self, base_url: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None,
                 timeout: float = 10.0):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_URL,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    @staticmethod
    def _check(response: httpx.Response) -> httpx.Response:
        if response.status_code >= 400:
            detail = ""
            try:
                detail = response.json().get("detail", "")
            except ValueError:
                detail = response.text
            raise ApiError(response.status_code, str(detail))
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            return response.json()
        except ValueError:
            raise ApiError(response.status_code, f"Invalid JSON response: {response.text[:200]}")

    async def get_locations(self, keyword: str, page: int, size: int, language: str = None) -> Dict[str, Any]:
        language = language or settings.DEFAULT_LANGUAGE
        response = self._check(await self._client.get(
            f"/locations/{page}/{size}/{language}", params={"s": keyword}
        ))
        return self._json(response)

    async def get_location(self, location_id: int, language: str = None) -> Optional[Dict[str, Any]]:
        language = language or settings.DEFAULT_LANGUAGE
        response = self._check(await self._client.get(f"/locations/{location_id}/{language}"))
        if response.status_code == 204:
            return None
        return self._json(response)

    async def get_agencies(self, keyword: str, page: int, size: int) -> Dict[str, Any]:
        response = self._check(await self._client.get(f"/agencies/{page}/{size}", params={"s": keyword}))
        return self._json(response)

    async def delete_agency(self, agency_id: int) -> int:
        response = self._check(await self._client.delete(f"/agencies/{agency_id}"))
        return response.status_code

    async def get_bookings(self, payload: Dict[str, Any], page: int, size: int,
                           language: str = None) -> Dict[str, Any]:
        language = language or settings.DEFAULT_LANGUAGE
        response = self._check(await self._client.post(f"/bookings/{page}/{size}/{language}", json=payload))
        return self._json(response)

    async def cancel_booking(self, booking_id: int) -> int:
        """Returns the HTTP status: 200 when the request was recorded, 204 when the booking is gone"""
        response = self._check(await self._client.post(f"/bookings/cancel/{booking_id}"))
        return response.status_code


def rows_of(data: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return list((data or {}).get("result_data") or [])


def total_of(data: Optional[Dict[str, Any]]) -> int:
    return int((data or {}).get("total_records") or 0)
