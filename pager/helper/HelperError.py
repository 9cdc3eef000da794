"""Collapses the different failure shapes into one user facing message."""

from collections.abc import Mapping
from typing import Any

from pager.errors.failures import ApplicationFailure, CursorFailure, UnknownFailure

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class HelperError:

    @staticmethod
    def _get_message(source: Any) -> str | None:
        if source is None:
            return None
        if isinstance(source, Mapping):
            message = source.get("message")
        else:
            message = getattr(source, "message", None)
        if isinstance(message, str) and message.strip():
            return message
        return None

    @staticmethod
    def reduce_error(error: Any) -> str:
        """
        Reduces any failure to a single non-empty message.

        Precedence: a plain string, then the nested body message, then the
        top-level message, then the text of a plain exception, then a generic
        fallback.

        Args:
            error (Any): A string, a CursorFailure, any exception or any other object.

        Returns:
            str: The message to show to the user.
        """
        if isinstance(error, str):
            return error if error.strip() else UNKNOWN_ERROR_MESSAGE

        body = error.get("body") if isinstance(error, Mapping) else getattr(error, "body", None)
        body_message = HelperError._get_message(body)
        if body_message:
            return body_message

        top_message = HelperError._get_message(error)
        if top_message:
            return top_message

        if isinstance(error, BaseException) and str(error).strip():
            return str(error)

        return UNKNOWN_ERROR_MESSAGE

    @staticmethod
    def classify(error: Any) -> CursorFailure:
        """
        Maps any failure onto the failure taxonomy.

        CursorFailure instances are returned unchanged. A plain string or an
        object with a message field becomes an ApplicationFailure. Everything
        else, including exceptions that only carry text, becomes an
        UnknownFailure wrapping the original.
        """
        if isinstance(error, CursorFailure):
            return error
        if isinstance(error, str):
            return ApplicationFailure(error) if error.strip() else UnknownFailure(error)
        message = HelperError._get_message(error)
        if message:
            return ApplicationFailure(message)
        return UnknownFailure(error)
