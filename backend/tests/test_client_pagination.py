"""
Tests for the client-side list state: paging, infinite scroll, keyword
resets and dropping of stale responses.
"""
import asyncio

from app.client.api import ApiError
from app.client.pagination import PaginatedList, PaginationMode


NAMES = [f"Item {i:02d}" for i in range(7)]


def make_loader(names=NAMES, calls=None):
    async def loader(keyword, page, size):
        if calls is not None:
            calls.append((keyword, page, size))
        matches = [n for n in names if keyword.lower() in n.lower()]
        start = (page - 1) * size
        return {
            "result_data": [{"id": i, "name": n} for i, n in enumerate(matches)][start:start + size],
            "total_records": len(matches),
        }
    return loader


def names_of(lst):
    return [r["name"] for r in lst.rows]


# ============== INFINITE SCROLL ==============

class TestInfiniteScroll:

    def test_first_page_replaces_rows(self):
        lst = PaginatedList(make_loader(), page_size=3, mode=PaginationMode.INFINITE_SCROLL)
        lst.rows = [{"id": 99, "name": "stale"}]

        asyncio.run(lst.load(1))

        assert names_of(lst) == NAMES[:3]
        assert lst.total_records == 7
        assert lst.fetch is True

    def test_next_pages_append(self):
        lst = PaginatedList(make_loader(), page_size=3, mode=PaginationMode.INFINITE_SCROLL)

        async def scroll():
            await lst.load(1)
            await lst.next_page()
            await lst.next_page()

        asyncio.run(scroll())

        assert names_of(lst) == NAMES
        assert lst.page == 3
        assert lst.row_count == 7

    def test_empty_page_stops_fetching(self):
        calls = []
        lst = PaginatedList(make_loader(calls=calls), page_size=4, mode=PaginationMode.INFINITE_SCROLL)

        async def scroll():
            await lst.load(1)
            await lst.next_page()  # rows 5-7
            await lst.next_page()  # empty
            return await lst.next_page()  # gated

        assert asyncio.run(scroll()) is False
        assert lst.fetch is False
        assert len(calls) == 3
        assert names_of(lst) == NAMES

    def test_keyword_change_resets_to_first_page(self):
        calls = []
        lst = PaginatedList(make_loader(calls=calls), page_size=3, mode=PaginationMode.INFINITE_SCROLL)

        async def run():
            await lst.load(1)
            await lst.next_page()
            await lst.set_keyword("05")

        asyncio.run(run())

        assert names_of(lst) == ["Item 05"]
        assert lst.page == 1
        assert calls[-1] == ("05", 1, 3)

    def test_same_keyword_does_not_refetch(self):
        calls = []
        lst = PaginatedList(make_loader(calls=calls), page_size=3, mode=PaginationMode.INFINITE_SCROLL)

        async def run():
            await lst.set_keyword("item")
            return await lst.set_keyword("item")

        assert asyncio.run(run()) is False
        assert len(calls) == 1


# ============== CLASSIC PAGING ==============

class TestClassicPaging:

    def test_pages_replace_rows(self):
        lst = PaginatedList(make_loader(), page_size=3, mode=PaginationMode.CLASSIC)

        async def run():
            await lst.load(1)
            await lst.next_page()

        asyncio.run(run())

        assert names_of(lst) == NAMES[3:6]
        assert lst.row_count == 6
        assert lst.has_next is True

    def test_last_page_has_no_next(self):
        lst = PaginatedList(make_loader(), page_size=3, mode=PaginationMode.CLASSIC)

        asyncio.run(lst.load(3))

        assert names_of(lst) == NAMES[6:]
        assert lst.row_count == 7
        assert lst.has_next is False
        assert asyncio.run(lst.next_page()) is False

    def test_previous_page(self):
        lst = PaginatedList(make_loader(), page_size=3, mode=PaginationMode.CLASSIC)

        async def run():
            await lst.load(2)
            await lst.previous_page()

        asyncio.run(run())

        assert lst.page == 1
        assert names_of(lst) == NAMES[:3]


# ============== SEQUENCING ==============

class TestStaleResponses:

    def test_slow_stale_response_is_discarded(self):
        async def run():
            release = asyncio.Event()

            async def loader(keyword, page, size):
                if keyword == "old":
                    await release.wait()
                    return {"result_data": [{"id": 1, "name": "old result"}], "total_records": 1}
                return {"result_data": [{"id": 2, "name": "new result"}], "total_records": 1}

            lst = PaginatedList(loader, page_size=10, mode=PaginationMode.INFINITE_SCROLL)
            old = asyncio.ensure_future(lst.load(1, "old"))
            await asyncio.sleep(0)
            new_loaded = await lst.load(1, "new")
            release.set()
            old_loaded = await old
            return lst, old_loaded, new_loaded

        lst, old_loaded, new_loaded = asyncio.run(run())

        assert new_loaded is True
        assert old_loaded is False
        assert names_of(lst) == ["new result"]
        assert lst.keyword == "new"
        assert lst.loading is False

    def test_failure_is_reported_once(self):
        errors = []

        async def loader(keyword, page, size):
            raise ApiError(400, "Database error: boom")

        lst = PaginatedList(loader, page_size=10, on_error=errors.append)

        assert asyncio.run(lst.load(1)) is False
        assert len(errors) == 1
        assert lst.loading is False
        assert lst.rows == []

    def test_undecodable_response_is_reported(self):
        errors = []

        async def loader(keyword, page, size):
            raise ValueError("Expecting value: line 1 column 1 (char 0)")

        lst = PaginatedList(loader, page_size=10, on_error=errors.append)

        assert asyncio.run(lst.load(1)) is False
        assert len(errors) == 1
        assert lst.loading is False
        assert lst.init is False

    def test_missing_envelope_counts_as_empty(self):
        async def loader(keyword, page, size):
            return None

        lst = PaginatedList(loader, page_size=10)
        asyncio.run(lst.load(1))

        assert lst.rows == []
        assert lst.total_records == 0
        assert lst.fetch is False


# ============== ROW UPDATES ==============

class TestRowUpdates:

    def test_replace_row_does_not_mutate_old_rows(self):
        lst = PaginatedList(make_loader(), page_size=3)
        asyncio.run(lst.load(1))
        old_rows = lst.rows
        old_first = old_rows[0]

        assert lst.replace_row(lambda r: r["id"] == 0, {"name": "Renamed"}) is True

        assert lst.rows is not old_rows
        assert lst.rows[0]["name"] == "Renamed"
        assert old_first["name"] == "Item 00"

    def test_remove_updates_counts(self):
        lst = PaginatedList(make_loader(), page_size=3, mode=PaginationMode.CLASSIC)
        asyncio.run(lst.load(1))

        removed = lst.remove(1)

        assert removed["name"] == "Item 01"
        assert names_of(lst) == ["Item 00", "Item 02"]
        assert lst.row_count == 2
        assert lst.total_records == 6
