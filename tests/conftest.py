"""Shared fixtures for the cursor pager tests."""

import asyncio
import logging
import math

import pytest

from pager.errors.failures import TransportFailure
from pager.helper.HelperConfig import HelperConfig
from pager.logging.logging_setup import ColorLogger
from pager.models.page import AdvancingPageResult, StandardPageResult


class FakeCursorTransport:
    """
    In-memory backend for both cursor variants.

    Rows are "Account 0".."Account n-1". Indices listed in deleted are
    skipped by advancing scans and counted as deleted rows. Every response
    hands out a new cursor so tests can see it being replaced.
    """

    def __init__(self, total_records: int = 25, page_size: int = 10, deleted: set[int] | None = None):
        self.rows = [{"Id": f"001{i:05d}", "Name": f"Account {i}", "Industry": "Energy", "Phone": "555-0100"} for i in range(total_records)]
        self.page_size = page_size
        self.deleted = deleted or set()
        self.calls: list[tuple] = []
        self.failure: Exception | None = None
        self.gate: asyncio.Event | None = None
        self._cursor_serial = 0

    def _new_cursor(self) -> str:
        self._cursor_serial += 1
        return f"cursor-{self._cursor_serial}"

    async def _maybe_block_or_fail(self) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.failure is not None:
            raise self.failure

    ############### standard ###############
    def _standard_page(self, page: int) -> StandardPageResult:
        start = (page - 1) * self.page_size
        return StandardPageResult(
            cursor=self._new_cursor(),
            records=self.rows[start:start + self.page_size],
            current_page=page,
            total_pages=math.ceil(len(self.rows) / self.page_size),
            total_records=len(self.rows),
        )

    async def do_init_standard(self) -> StandardPageResult:
        self.calls.append(("init_standard",))
        await self._maybe_block_or_fail()
        return self._standard_page(1)

    async def do_get_standard_page(self, cursor, page: int, page_size: int) -> StandardPageResult:
        self.calls.append(("standard_page", cursor, page, page_size))
        await self._maybe_block_or_fail()
        return self._standard_page(page)

    ############### advancing ###############
    def _advancing_page(self, start_index: int, page_size: int, page: int) -> AdvancingPageResult:
        records = []
        deleted_rows = 0
        index = start_index
        while index < len(self.rows) and len(records) < page_size:
            if index in self.deleted:
                deleted_rows += 1
            else:
                records.append(self.rows[index])
            index += 1
        return AdvancingPageResult(
            cursor=self._new_cursor(),
            records=records,
            current_page=page,
            total_records=len(self.rows),
            next_index=index,
            deleted_rows=deleted_rows,
            has_more_pages=index < len(self.rows),
        )

    async def do_init_advancing(self) -> AdvancingPageResult:
        self.calls.append(("init_advancing",))
        await self._maybe_block_or_fail()
        return self._advancing_page(0, self.page_size, 1)

    async def do_get_advancing_page(self, cursor, start_index: int, page_size: int, page: int) -> AdvancingPageResult:
        self.calls.append(("advancing_page", cursor, start_index, page_size, page))
        await self._maybe_block_or_fail()
        return self._advancing_page(start_index, page_size, page)

    def page_calls(self) -> list[tuple]:
        return [call for call in self.calls if call[0].endswith("_page")]


@pytest.fixture
def helper_config() -> HelperConfig:
    return HelperConfig(logger=ColorLogger(logging.getLogger("pager.tests")))


@pytest.fixture
def fake_transport() -> FakeCursorTransport:
    return FakeCursorTransport()


@pytest.fixture
def transport_failure() -> TransportFailure:
    return TransportFailure(message="Request failed with status 500", body={"message": "Cursor expired"}, status_code=500)


@pytest.fixture
def make_transport():
    """Factory for fake transports with custom sizes or deleted rows."""
    return FakeCursorTransport
