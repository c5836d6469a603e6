"""
Client-side state for paginated, searchable lists.

A PaginatedList owns the rows shown to the user and keeps them in step with
the paged list endpoints:

* page 1 always replaces the rows; later pages append in infinite-scroll
  mode and replace in classic mode
* ``fetch`` stays true only while the last page returned something, so
  infinite scroll stops at the first empty page
* a keyword change clears the rows and starts again from page 1
* every request carries a token and only the latest one may update state,
  so a slow stale response can never overwrite a newer one
"""
import enum
import logging
import httpx
from typing import Any, Awaitable, Callable, Dict, List, Optional

from app.core.config import settings
from app.client.api import ApiError, rows_of, total_of

logger = logging.getLogger(__name__)

Row = Dict[str, Any]
Loader = Callable[[str, int, int], Awaitable[Optional[Dict[str, Any]]]]


class PaginationMode(str, enum.Enum):
    CLASSIC = "classic"
    INFINITE_SCROLL = "infinite_scroll"


class PaginatedList:
    def __init__(
        self,
        loader: Loader,
        page_size: Optional[int] = None,
        mode: Optional[PaginationMode] = None,
        keyword: str = "",
        transform: Optional[Callable[[Row], Row]] = None,
        on_load: Optional[Callable[[List[Row], int], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ):
        self._loader = loader
        self._transform = transform
        self._on_load = on_load
        self._on_error = on_error
        self._token = 0

        self.page_size = page_size or settings.PAGE_SIZE
        self.mode = PaginationMode(mode or settings.PAGINATION_MODE)
        self.keyword = keyword
        self.rows: List[Row] = []
        self.page = 1
        self.row_count = 0
        self.total_records = 0
        self.fetch = False
        self.loading = False
        self.init = True

    @property
    def infinite(self) -> bool:
        return self.mode == PaginationMode.INFINITE_SCROLL

    @property
    def has_next(self) -> bool:
        if self.infinite:
            return self.fetch
        return self.row_count < self.total_records

    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def _is_latest(self, token: int) -> bool:
        return token == self._token

    def _merge(self, page: int, result: List[Row]) -> List[Row]:
        if page > 1 and self.infinite:
            return [*self.rows, *result]
        return list(result)

    async def load(self, page: int, keyword: Optional[str] = None) -> bool:
        """
        Fetch one page and merge it into the rows.

        Returns False when the response was superseded by a newer request
        or the request failed.
        """
        keyword = self.keyword if keyword is None else keyword
        token = self._next_token()
        self.loading = True

        try:
            data = await self._loader(keyword, page, self.page_size)
        except (ApiError, httpx.HTTPError, ValueError) as e:
            if not self._is_latest(token):
                return False
            self.loading = False
            self.init = False
            logger.error(f"Failed to load page {page} (keyword={keyword!r}): {e}")
            if self._on_error:
                self._on_error(e)
            return False

        if not self._is_latest(token):
            logger.debug(f"Discarding stale page {page} response (token {token} < {self._token})")
            return False

        result = rows_of(data)
        if self._transform:
            result = [self._transform(row) for row in result]

        self.rows = self._merge(page, result)
        self.page = page
        self.keyword = keyword
        self.total_records = total_of(data)
        self.fetch = len(result) > 0
        if self.infinite:
            self.row_count = len(self.rows)
        else:
            self.row_count = (page - 1) * self.page_size + len(self.rows)
        self.loading = False
        self.init = False

        if self._on_load:
            self._on_load(result, self.total_records)
        return True

    async def refresh(self) -> bool:
        return await self.load(1)

    async def set_keyword(self, keyword: str) -> bool:
        """Start over from page 1 when the keyword changes"""
        keyword = keyword or ""
        if keyword == self.keyword and not self.init:
            return False
        self.rows = []
        self.page = 1
        self.keyword = keyword
        return await self.load(1, keyword)

    async def next_page(self) -> bool:
        """Load the page after the current one (scroll near the bottom, or "next")"""
        if self.loading or not self.has_next:
            return False
        return await self.load(self.page + 1)

    async def previous_page(self) -> bool:
        if self.infinite or self.loading or self.page <= 1:
            return False
        return await self.load(self.page - 1)

    def replace_row(self, predicate: Callable[[Row], bool], changes: Dict[str, Any]) -> bool:
        """Swap matching rows for updated copies; existing row dicts are left untouched"""
        matched = False
        rows = []
        for row in self.rows:
            if predicate(row):
                row = {**row, **changes}
                matched = True
            rows.append(row)
        if matched:
            self.rows = rows
        return matched

    def remove(self, index: int) -> Row:
        """Drop one row after a successful delete and keep the counters in step"""
        removed = self.rows[index]
        self.rows = self.rows[:index] + self.rows[index + 1:]
        self.row_count = max(self.row_count - 1, 0)
        self.total_records = max(self.total_records - 1, 0)
        return removed
