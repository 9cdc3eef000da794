"""Cursor client for backends that know the total page count up front."""

from pager.clients.cursor.CursorTransportInterface import CursorTransportInterface
from pager.cursor.PageCursorClientInterface import PAGE_SIZE, PageCursorClientInterface
from pager.errors.failures import CursorFailure
from pager.helper.HelperConfig import HelperConfig
from pager.helper.HelperError import HelperError
from pager.models.cursor import CursorToken
from pager.models.page import ACCOUNT_COLUMNS, Record, StandardPageResult
from pager.models.state import CursorState
from pager.models.view import StandardViewState


class StandardCursorClient(PageCursorClientInterface):
    """
    Navigates a standard cursor by absolute page number.

    total_pages and total_records are taken from the init response and stay
    fixed for the session. The backend alone decides the page boundaries.
    """

    def __init__(self, helper_config: HelperConfig, transport: CursorTransportInterface):
        self.logging = helper_config.get_logger()
        self._transport = transport

        self._cursor: CursorToken | None = None
        self._records: list[Record] = []
        self._current_page = 0
        self._total_pages = 0
        self._total_records = 0

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
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def total_records(self) -> int:
        return self._total_records

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
        return self._total_pages > 0

    @property
    def is_prev_disabled(self) -> bool:
        return self._is_loading or self._current_page <= 1

    @property
    def is_next_disabled(self) -> bool:
        return self._is_loading or self._current_page >= self._total_pages

    @property
    def page_info(self) -> str:
        return f"Page {self._current_page} of {self._total_pages}"

    @property
    def record_count_info(self) -> str:
        if self._total_records == 0:
            return "Showing 0-0 of 0 records"
        start = (self._current_page - 1) * PAGE_SIZE + 1
        end = min(self._current_page * PAGE_SIZE, self._total_records)
        return f"Showing {start}-{end} of {self._total_records} records"

    def get_view_state(self) -> StandardViewState:
        return StandardViewState(
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
            total_pages=self._total_pages,
        )

    ##########################################
    ############### NAVIGATION ###############
    ##########################################

    def _is_busy(self, action: str) -> bool:
        if self._is_loading:
            self.logging.debug("Ignoring %s on standard cursor: a request is still outstanding.", action)
        return self._is_loading

    def _record_failure(self, error: Exception) -> None:
        self._last_failure = HelperError.classify(error)
        self._error_message = HelperError.reduce_error(error)

    def _apply_page(self, result: StandardPageResult) -> None:
        self._cursor = result.cursor
        self._records = list(result.records)
        self._current_page = result.current_page

    async def initialize(self) -> None:
        """
        Opens a new standard cursor and shows its first page.

        On failure the error message is set and the current records stay as they are.
        """
        if self._is_busy("initialize"):
            return
        self._is_loading = True
        self._error_message = None
        self._last_failure = None
        try:
            result = await self._transport.do_init_standard()
        except Exception as e:
            self._record_failure(e)
            self.logging.error("Failed to open standard cursor: %s", self._error_message)
        else:
            self._apply_page(result)
            self._total_pages = result.total_pages
            self._total_records = result.total_records
            self.logging.debug("Standard cursor ready: %d pages, %d records", self._total_pages, self._total_records)
        finally:
            self._is_loading = False

    async def go_to(self, target_page: int) -> None:
        """
        Loads target_page. Does nothing if it is outside 1..total_pages or a
        request is outstanding.
        """
        if self._is_busy(f"page {target_page}"):
            return
        if target_page < 1 or target_page > self._total_pages:
            self.logging.debug("Ignoring page %d on standard cursor: outside 1..%d", target_page, self._total_pages)
            return
        self._is_loading = True
        self._error_message = None
        self._last_failure = None
        try:
            result = await self._transport.do_get_standard_page(cursor=self._cursor, page=target_page, page_size=PAGE_SIZE)
        except Exception as e:
            self._record_failure(e)
            self.logging.error("Failed to load page %d of standard cursor: %s", target_page, self._error_message)
        else:
            self._apply_page(result)
            self.logging.debug("Loaded page %d of %d", self._current_page, self._total_pages)
        finally:
            self._is_loading = False

    async def go_first(self) -> None:
        await self.go_to(1)

    async def go_previous(self) -> None:
        await self.go_to(self._current_page - 1)

    async def go_next(self) -> None:
        await self.go_to(self._current_page + 1)

    async def go_last(self) -> None:
        await self.go_to(self._total_pages)
