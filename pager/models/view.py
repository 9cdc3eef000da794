"""Display state handed to whatever renders the record table."""

from typing import Any

from pydantic import BaseModel

from pager.models.page import ColumnDefinition, Record
from pager.models.state import CursorState


class CursorViewState(BaseModel):
    state: CursorState
    columns: list[ColumnDefinition]
    records: list[Record]
    error_message: str | None = None
    is_loading: bool
    has_records: bool
    records_returned: int
    row_number_offset: int
    show_pagination: bool
    is_prev_disabled: bool
    is_next_disabled: bool
    page_info: str
    record_count_info: str

    def to_display(self) -> dict[str, Any]:
        """Dump the view state, leaving out every value that is not set."""
        return self.model_dump(mode="json", exclude_none=True)


class StandardViewState(CursorViewState):
    total_pages: int


class AdvancingViewState(CursorViewState):
    estimated_total_pages: int
    show_deleted_rows_badge: bool
    deleted_rows_info: str | None = None
    tracked_pages_info: str
