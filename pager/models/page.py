"""Page results returned by the cursor transports."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pager.models.cursor import CursorToken


class Record(BaseModel):
    """
    A single backend row. Only the display fields are named, everything else
    the backend sends (Id, attributes, ...) is kept as extra data.
    """

    model_config = ConfigDict(extra="allow")

    Name: str | None = None
    Industry: str | None = None
    Phone: str | None = None
    CreatedDate: str | None = None


class ColumnDefinition(BaseModel):
    label: str
    fieldName: str
    type: str = "text"
    sortable: bool = False
    typeAttributes: dict[str, str] | None = None


ACCOUNT_COLUMNS: list[ColumnDefinition] = [
    ColumnDefinition(label="Account Name", fieldName="Name", type="text"),
    ColumnDefinition(label="Industry", fieldName="Industry", type="text"),
    ColumnDefinition(label="Phone", fieldName="Phone", type="phone"),
    ColumnDefinition(
        label="Created Date",
        fieldName="CreatedDate",
        type="date",
        typeAttributes={
            "year": "numeric",
            "month": "short",
            "day": "2-digit",
            "hour": "2-digit",
            "minute": "2-digit",
        },
    ),
]


class PageResult(BaseModel):
    """
    Fields shared by both cursor variants.

    Attributes:
        cursor:       The new opaque cursor, replaces the one sent with the request.
        records:      The rows of this page in backend order.
        current_page: 1-based number of the page these rows belong to.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    cursor: CursorToken
    records: list[Record] = []
    current_page: int = Field(ge=1)

    @field_validator("cursor", mode="before")
    @classmethod
    def _wrap_cursor(cls, value: Any) -> CursorToken:
        if isinstance(value, CursorToken):
            return value
        return CursorToken(value)


class StandardPageResult(PageResult):
    """Page of a standard cursor. Both totals are fixed when the cursor is created."""

    total_pages: int = Field(ge=0)
    total_records: int = Field(ge=0)


class AdvancingPageResult(PageResult):
    """
    Page of an advancing-index cursor.

    Attributes:
        total_records:  Live re-count, may change between calls.
        next_index:     Scan offset to resume from for the following page.
        deleted_rows:   Rows counted earlier but gone when this page was scanned.
        has_more_pages: Whether the scan can continue past this page.
    """

    total_records: int = Field(ge=0)
    next_index: int = Field(ge=0)
    deleted_rows: int = Field(default=0, ge=0)
    has_more_pages: bool = False
