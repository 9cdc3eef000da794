from abc import abstractmethod
from typing import Callable, TypeVar

from pydantic import BaseModel, ValidationError

from pager.clients.ClientInterface import ClientInterface
from pager.errors.failures import ApplicationFailure, TransportFailure
from pager.helper.HelperConfig import HelperConfig
from pager.models.cursor import CursorToken
from pager.models.page import AdvancingPageResult, StandardPageResult

T = TypeVar("T", bound=BaseModel)


class CursorTransportInterface(ClientInterface):
    """
    Remote side of the cursor protocol. Every variant has two operations: one
    starting a new scan session and one fetching a page relative to a cursor.

    All failures leave this class as TransportFailure or ApplicationFailure.
    Nothing is retried here.
    """

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_client_type(self) -> str:
        return "cursor"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_endpoint_standard_init(self) -> str:
        """
        Returns the endpoint path that opens a standard cursor.

        Raises:
            NotImplementedError: If the method is not implemented in a subclass.
        """
        pass

    @abstractmethod
    def _get_endpoint_standard_page(self) -> str:
        """
        Returns the endpoint path that fetches a page of a standard cursor.
        """
        pass

    @abstractmethod
    def _get_endpoint_advancing_init(self) -> str:
        """
        Returns the endpoint path that opens an advancing-index cursor.
        """
        pass

    @abstractmethod
    def _get_endpoint_advancing_page(self) -> str:
        """
        Returns the endpoint path that fetches a page of an advancing-index cursor.
        """
        pass

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    @abstractmethod
    def get_standard_page_payload(self, cursor: CursorToken, page: int, page_size: int) -> dict:
        """
        Builds the request body for a standard page fetch.

        Args:
            cursor (CursorToken): The cursor of the previous response, echoed unchanged.
            page (int): 1-based page number, the only addressing the backend uses.
            page_size (int): Rows per page.
        """
        pass

    @abstractmethod
    def get_advancing_page_payload(self, cursor: CursorToken, start_index: int, page_size: int, page: int) -> dict:
        """
        Builds the request body for an advancing-index page fetch.

        Args:
            cursor (CursorToken): The cursor of the previous response, echoed unchanged.
            start_index (int): 0-based scan offset the backend starts scanning at.
            page_size (int): Maximum number of live rows to return.
            page (int): The page number being requested, only echoed back by the backend.
        """
        pass

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    @abstractmethod
    def _parse_standard_page(self, response: dict) -> StandardPageResult:
        """
        Maps the backend response of a standard init or page call.

        Raises:
            ValidationError: If required fields are missing or invalid.
        """
        pass

    @abstractmethod
    def _parse_advancing_page(self, response: dict) -> AdvancingPageResult:
        """
        Maps the backend response of an advancing-index init or page call.

        Raises:
            ValidationError: If required fields are missing or invalid.
        """
        pass

    def _extract_application_error(self, response: dict) -> str | None:
        """
        Returns the message of an application error reported inside a 2xx
        response, or None. Backends without such errors keep the default.
        """
        return None

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def _do_cursor_call(self, endpoint: str, payload: dict | None, parser: Callable[[dict], T], operation: str) -> T:
        resp = await self.do_request(method="POST", json=payload or {}, endpoint=endpoint, raise_on_error=True)
        try:
            raw = resp.json()
        except ValueError as e:
            raise TransportFailure(message=f"Malformed {operation} response from {self.get_engine_name()}: body is not JSON.", status_code=resp.status_code) from e
        if not isinstance(raw, dict):
            raise TransportFailure(message=f"Malformed {operation} response from {self.get_engine_name()}: expected an object.", status_code=resp.status_code)

        app_error = self._extract_application_error(raw)
        if app_error:
            raise ApplicationFailure(app_error)

        try:
            return parser(raw)
        except (ValidationError, ValueError) as e:
            self.logging.error("Malformed %s response from %s: %s", operation, self.get_engine_name(), e)
            raise TransportFailure(message=f"Malformed {operation} response from {self.get_engine_name()}.", status_code=resp.status_code) from e

    async def do_init_standard(self) -> StandardPageResult:
        """
        Opens a new standard cursor and returns its first page.

        Returns:
            StandardPageResult: Page 1 with the total page and record counts.

        Raises:
            TransportFailure: On network errors, error statuses and malformed responses.
            ApplicationFailure: If the backend reports an application error.
        """
        result = await self._do_cursor_call(self._get_endpoint_standard_init(), None, self._parse_standard_page, "standard init")
        self.logging.debug("Opened standard cursor on %s: %d pages, %d records", self.get_engine_name(), result.total_pages, result.total_records)
        return result

    async def do_get_standard_page(self, cursor: CursorToken, page: int, page_size: int) -> StandardPageResult:
        """
        Fetches one page of a standard cursor by its absolute page number.

        Raises:
            TransportFailure: On network errors, error statuses and malformed responses.
            ApplicationFailure: If the backend reports an application error.
        """
        payload = self.get_standard_page_payload(cursor=cursor, page=page, page_size=page_size)
        return await self._do_cursor_call(self._get_endpoint_standard_page(), payload, self._parse_standard_page, "standard page")

    async def do_init_advancing(self) -> AdvancingPageResult:
        """
        Opens a new advancing-index cursor and returns its first page.

        Raises:
            TransportFailure: On network errors, error statuses and malformed responses.
            ApplicationFailure: If the backend reports an application error.
        """
        result = await self._do_cursor_call(self._get_endpoint_advancing_init(), None, self._parse_advancing_page, "advancing init")
        self.logging.debug("Opened advancing cursor on %s: ~%d records, next index %d", self.get_engine_name(), result.total_records, result.next_index)
        return result

    async def do_get_advancing_page(self, cursor: CursorToken, start_index: int, page_size: int, page: int) -> AdvancingPageResult:
        """
        Fetches up to page_size live rows scanning forward from start_index.

        Raises:
            TransportFailure: On network errors, error statuses and malformed responses.
            ApplicationFailure: If the backend reports an application error.
        """
        payload = self.get_advancing_page_payload(cursor=cursor, start_index=start_index, page_size=page_size, page=page)
        return await self._do_cursor_call(self._get_endpoint_advancing_page(), payload, self._parse_advancing_page, "advancing page")
