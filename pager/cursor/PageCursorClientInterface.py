from abc import ABC, abstractmethod

from pager.models.page import Record
from pager.models.state import CursorState
from pager.models.view import CursorViewState

PAGE_SIZE = 10  # fixed by the display contract


class PageCursorClientInterface(ABC):
    """
    What a record table needs from a paginated cursor client.

    Implementations share no code: each variant keeps its own bookkeeping.
    All navigation calls are silent no-ops when the target is out of range or
    a request is still outstanding.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Starts a new scan session, abandoning any cursor held so far."""
        pass

    @abstractmethod
    async def go_first(self) -> None:
        pass

    @abstractmethod
    async def go_previous(self) -> None:
        pass

    @abstractmethod
    async def go_next(self) -> None:
        pass

    @abstractmethod
    async def go_last(self) -> None:
        pass

    @property
    @abstractmethod
    def is_loading(self) -> bool:
        pass

    @property
    @abstractmethod
    def current_page(self) -> int:
        """1-based number of the page on display, 0 before the first successful load."""
        pass

    @property
    @abstractmethod
    def records(self) -> list[Record]:
        pass

    @property
    @abstractmethod
    def error_message(self) -> str | None:
        pass

    @property
    @abstractmethod
    def state(self) -> CursorState:
        pass

    @abstractmethod
    def get_view_state(self) -> CursorViewState:
        """Returns a snapshot of everything the table renders."""
        pass
