"""Opaque handle for the server-issued scan cursor."""

from typing import Any


class CursorToken:
    """
    Wraps the cursor value returned by the backend.

    The client never looks inside: the only way to get the raw value back is
    unwrap(), which transports use to echo it on the next page request.
    Every page response carries a fresh token that replaces the previous one.
    """

    __slots__ = ("_value",)

    def __init__(self, value: Any):
        if value is None:
            raise ValueError("A cursor token requires a server-issued value.")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name, value):
        raise AttributeError("CursorToken is immutable.")

    def unwrap(self) -> Any:
        """Return the raw value for sending it back to the backend."""
        return self._value

    def __eq__(self, other) -> bool:
        if not isinstance(other, CursorToken):
            return NotImplemented
        return self._value == other._value

    # the wrapped value may be a dict, so tokens are compared but never hashed
    __hash__ = None

    def __repr__(self) -> str:
        return "CursorToken(<opaque>)"
