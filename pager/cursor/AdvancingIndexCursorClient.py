"""Cursor client for backends that only report where the next scan starts."""

import math

from pager.clients.cursor.CursorTransportInterface import CursorTransportInterface
from pager.cursor.PageCursorClientInterface import PAGE_SIZE, PageCursorClientInterface
from pager.cursor.PageStartIndexLedger import PageStartIndexLedger
from pager.errors.failures import CursorFailure
from pager.helper.HelperConfig import HelperConfig
from pager.helper.HelperError import HelperError
from pager.models.cursor import CursorToken
from pager.models.page import ACCOUNT_COLUMNS, AdvancingPageResult, Record
from pager.models.state import CursorState
from pager.models.view import AdvancingViewState


class AdvancingIndexCursorClient(PageCursorClientInterface):
    """
    Navigates an advancing-index cursor.

    The backend addresses pages by scan offset, skips rows deleted since they
    were counted and reports how many it skipped. Moving forward uses the
    next_index of the current page, moving back uses the offsets remembered in
    the PageStartIndexLedger. Jumps to pages never reached one step at a time,
    including "last", fall back to (page - 1) * PAGE_SIZE.

    total_records is a live estimate refreshed by every response, so the page
    count derived from it is shown with a "~".
    """

    def __init__(self, helper_config: HelperConfig, transport: CursorTransportInterface):
        self.logging = helper_config.get_logger()
        self._transport = transport

        self._cursor: CursorToken | None = None
        self._records: list[Record] = []
        self._current_page = 0
        self._total_records = 0
        self._next_index = 0
        self._deleted_rows_skipped = 0
        self._has_more_pages = False
        self._ledger = PageStartIndexLedger()

        self._is_loading = False
        self._error_message: str | None = None
        self._last_failure: CursorFailure | None = None

    ##########################################
    ################ GETTER ##################
    ##########################################

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def records(self) -> list[Record]:
        return list(self._records)

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def last_failure(self) -> CursorFailure | None:
        """The classified failure of the last action, None if it succeeded."""
        return self._last_failure

    @property
    def cursor(self) -> CursorToken | None:
        return self._cursor

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_records(self) -> int:
        return self._total_records

    @property
    def next_index(self) -> int:
        return self._next_index

    @property
    def deleted_rows_skipped(self) -> int:
        return self._deleted_rows_skipped

    @property
    def has_more_pages(self) -> bool:
        return self._has_more_pages

    @property
    def page_start_indices(self) -> list[int]:
        return self._ledger.as_list()

    @property
    def state(self) -> CursorState:
        if self._is_loading:
            return CursorState.LOADING
        if self._error_message:
            return CursorState.ERROR
        if self._cursor is None:
            return CursorState.UNINITIALIZED
        return CursorState.READY

    ################ DERIVED ##################
    @property
    def estimated_total_pages(self) -> int:
        if self._total_records == 0:
            return 0
        return math.ceil(self._total_records / PAGE_SIZE)

    @property
    def has_records(self) -> bool:
        return len(self._records) > 0

    @property
    def records_returned(self) -> int:
        return len(self._records)

    @property
    def row_number_offset(self) -> int:
        return (self._current_page - 1) * PAGE_SIZE

    @property
    def show_pagination(self) -> bool:
        return self.estimated_total_pages > 0

    @property
    def is_prev_disabled(self) -> bool:
        return self._is_loading or self._current_page <= 1

    @property
    def is_next_disabled(self) -> bool:
        return self._is_loading or self._current_page >= self.estimated_total_pages

    @property
    def page_info(self) -> str:
        return f"Page {self._current_page} of ~{self.estimated_total_pages}"

    @property
    def record_count_info(self) -> str:
        return f"{self._total_records} total records"

    @property
    def show_deleted_rows_badge(self) -> bool:
        return self._deleted_rows_skipped > 0

    @property
    def deleted_rows_info(self) -> str | None:
        if not self.show_deleted_rows_badge:
            return None
        return f"{self._deleted_rows_skipped} deleted rows skipped on this page"

    @property
    def tracked_pages_info(self) -> str:
        return f"{len(self._ledger)} page indices tracked"

    def get_view_state(self) -> AdvancingViewState:
        return AdvancingViewState(
            state=self.state,
            columns=ACCOUNT_COLUMNS,
            records=self.records,
            error_message=self._error_message,
            is_loading=self._is_loading,
            has_records=self.has_records,
            records_returned=self.records_returned,
            row_number_offset=self.row_number_offset,
            show_pagination=self.show_pagination,
            is_prev_disabled=self.is_prev_disabled,
            is_next_disabled=self.is_next_disabled,
            page_info=self.page_info,
            record_count_info=self.record_count_info,
            estimated_total_pages=self.estimated_total_pages,
            show_deleted_rows_badge=self.show_deleted_rows_badge,
            deleted_rows_info=self.deleted_rows_info,
            tracked_pages_info=self.tracked_pages_info,
        )

    ##########################################
    ############### NAVIGATION ###############
    ##########################################

    def _is_busy(self, action: str) -> bool:
        if self._is_loading:
            self.logging.debug("Ignoring %s on advancing cursor: a request is still outstanding.", action)
        return self._is_loading

    def _record_failure(self, error: Exception) -> None:
        self._last_failure = HelperError.classify(error)
        self._error_message = HelperError.reduce_error(error)

    def _apply_page(self, result: AdvancingPageResult) -> None:
        self._cursor = result.cursor
        self._records = list(result.records)
        self._current_page = result.current_page
        self._total_records = result.total_records
        self._next_index = result.next_index
        self._deleted_rows_skipped = result.deleted_rows
        self._has_more_pages = result.has_more_pages
        if result.deleted_rows:
            self.logging.info("Skipped %d deleted rows while loading page %d", result.deleted_rows, result.current_page)

    async def initialize(self) -> None:
        """
        Opens a new advancing-index cursor, shows its first page and resets
        the tracked page offsets to [0].
        """
        if self._is_busy("initialize"):
            return
        self._is_loading = True
        self._error_message = None
        self._last_failure = None
        try:
            result = await self._transport.do_init_advancing()
        except Exception as e:
            self._record_failure(e)
            self.logging.error("Failed to open advancing cursor: %s", self._error_message)
        else:
            self._apply_page(result)
            self._ledger.reset()
            self.logging.debug("Advancing cursor ready: ~%d records, next index %d", self._total_records, self._next_index)
        finally:
            self._is_loading = False

    async def _fetch_page(self, start_index: int, target_page: int) -> None:
        self._is_loading = True
        self._error_message = None
        self._last_failure = None
        try:
            result = await self._transport.do_get_advancing_page(
                cursor=self._cursor,
                start_index=start_index,
                page_size=PAGE_SIZE,
                page=target_page,
            )
        except Exception as e:
            self._record_failure(e)
            self.logging.error("Failed to load page %d from index %d: %s", target_page, start_index, self._error_message)
        else:
            self._apply_page(result)
            self.logging.debug("Loaded page %d from index %d, next index %d", self._current_page, start_index, self._next_index)
        finally:
            self._is_loading = False

    async def go_next(self) -> None:
        """
        Loads the page after the current one, starting at the current next_index.

        The offset is remembered for the target page before the request is
        sent, so coming back later reuses exactly this offset.
        """
        if self._is_busy("next"):
            return
        if not self._has_more_pages:
            return
        target_page = self._current_page + 1
        start_index = self._next_index
        self._ledger.record(target_page, start_index)
        await self._fetch_page(start_index, target_page)

    async def go_previous(self) -> None:
        if self._is_busy("previous"):
            return
        if self._current_page <= 1:
            return
        target_page = self._current_page - 1
        await self._fetch_page(self._ledger.start_index_for(target_page, PAGE_SIZE), target_page)

    async def go_first(self) -> None:
        if self._is_busy("first"):
            return
        if self._current_page <= 1:
            return
        await self._fetch_page(0, 1)

    async def go_last(self) -> None:
        """
        Jumps to the estimated last page.

        The start offset is always (last - 1) * PAGE_SIZE. Rows deleted before
        that point shift the real boundary, so the jump is a best effort.
        """
        if self._is_busy("last"):
            return
        last_page = self.estimated_total_pages
        if self._current_page >= last_page:
            return
        await self._fetch_page((last_page - 1) * PAGE_SIZE, last_page)
