from enum import Enum


class CursorState(str, Enum):
    """Coarse state of a cursor client. Derived from its fields, never stored."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
