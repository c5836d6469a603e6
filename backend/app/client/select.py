import asyncio
from typing import Any, Dict, Optional

from app.core.config import settings
from app.client.api import RentalApiClient
from app.client.pagination import PaginatedList, PaginationMode, Loader


class SelectOptions(PaginatedList):
    """
    Options of an autocomplete select, loaded page by page while the user
    scrolls the option list or types.
    """

    def __init__(self, loader: Loader, page_size: Optional[int] = None,
                 debounce: Optional[float] = None, **kwargs):
        super().__init__(loader, page_size=page_size, mode=PaginationMode.INFINITE_SCROLL, **kwargs)
        self.debounce = settings.SEARCH_DEBOUNCE_SECONDS if debounce is None else debounce
        self.fetch = True
        self.focused = False
        self._pending: Optional[int] = None

    async def load(self, page: int, keyword: Optional[str] = None) -> bool:
        if not self.fetch and page != 1:
            return False
        return await super().load(page, keyword)

    async def focus(self) -> bool:
        """First focus loads page 1, later focuses reuse the options"""
        if self.focused:
            return False
        self.rows = []
        self.page = 1
        loaded = await self.load(1)
        if loaded:
            self.focused = True
        return loaded

    @property
    def debouncing(self) -> bool:
        """True while a typed keyword waits for its first page"""
        return self._pending is not None and self._is_latest(self._pending)

    async def scrolled_to_bottom(self) -> bool:
        if not self.fetch or self.loading or self.debouncing:
            return False
        return await self.load(self.page + 1)

    async def next_page(self) -> bool:
        if self.debouncing:
            return False
        return await super().next_page()

    async def input_changed(self, value: str) -> bool:
        value = value or ""
        if value == self.keyword:
            return False

        # Claim a token so older in-flight pages are dropped while we wait
        token = self._next_token()
        self.rows = []
        self.page = 1
        self.keyword = value
        self._pending = token
        if self.debounce:
            await asyncio.sleep(self.debounce)
        if not self._is_latest(token):
            return False
        self._pending = None
        return await self.load(1, value)

    async def clear(self) -> bool:
        self.rows = []
        self.page = 1
        self.keyword = ""
        self.fetch = True
        return await self.load(1, "")


def agency_option(agency: Dict[str, Any]) -> Dict[str, Any]:
    return {"id": agency["id"], "name": agency["full_name"], "image": agency.get("avatar")}


def location_select(client: RentalApiClient, language: Optional[str] = None, **kwargs) -> SelectOptions:
    async def loader(keyword: str, page: int, size: int):
        return await client.get_locations(keyword, page, size, language)

    return SelectOptions(loader, **kwargs)


def agency_select(client: RentalApiClient, **kwargs) -> SelectOptions:
    return SelectOptions(client.get_agencies, transform=agency_option, **kwargs)
