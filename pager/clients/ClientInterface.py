from abc import ABC, abstractmethod
from typing import Any

import httpx

from pager.errors.failures import TransportFailure
from pager.helper.HelperConfig import HelperConfig
from pager.models.config import EnvConfig


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0)

        self._client: httpx.AsyncClient | None = None
        self.validate_full_configuration()

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Reads every required configuration value once so a missing one fails at construction.

        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        for config in self._get_required_config():
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "cursor"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the backend engine in lowercase. E.g. "salesforce"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        pass

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns all configuration values the client reads.

        Returns:
            list[EnvConfig]: One entry per environment variable, without the client prefix.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "CURSOR_SALESFORCE_BASE_URL"
        """
        key_prefix = f"{self.get_client_type().upper()}_{self.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            raw_key (str): The configuration key without prefix, e.g. "BASE_URL"
            default (Any): The value to return if the key is not set
            val_type (str): One of "string", "number" and "bool"
        """
        key = self._get_config_key_name(raw_key)
        if val_type == "string":
            return self._helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return self._helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return self._helper_config.get_bool_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {self.get_client_type().upper()} client '{self.get_engine_name()}'.")

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the backend, or an empty dict.
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend, e.g. "https://example.my.salesforce.com"
        """
        pass

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        pass

    ##########################################
    ########### ERROR PARSER #################
    ##########################################

    def _parse_error_body(self, response: httpx.Response) -> dict:
        """
        Extracts the error payload of a failed response. Engines override this
        when their backend wraps errors differently.

        Returns:
            dict: The payload, with at least a "message" key when the backend sent one.
        """
        try:
            body = response.json()
        except ValueError:
            return {"message": response.text} if response.text else {}
        return body if isinstance(body, dict) else {}

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_healthcheck(self) -> httpx.Response:
        """Checks that the backend answers with a 2xx status.

        Raises:
            TransportFailure: If the backend is unreachable or unhealthy.
        """
        return await self.do_request(method="GET", endpoint=self._get_endpoint_healthcheck(), raise_on_error=True)

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Creates the HTTP client. A transport can be injected, e.g. httpx.MockTransport in tests."""
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Closes the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def do_request(
        self,
        method: str = "GET",
        json: dict | list | None = None,
        endpoint: str = "",
        raise_on_error: bool = False,
    ) -> httpx.Response:
        """Sends an HTTP request to the backend.

        Args:
            method: HTTP method (GET, POST, ...).
            json: JSON-serialisable body.
            endpoint: Path appended to the base URL (leading slash optional).
            raise_on_error: Raise instead of returning a non-2xx response.

        Returns:
            The raw httpx.Response.

        Raises:
            TransportFailure: If the network call fails, or the status is not 2xx and raise_on_error is True.
            RuntimeError: If boot() was not called.
        """
        if self._client is None:
            raise RuntimeError("HTTP client not initialised. Call boot() before making requests.")

        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""

        headers: dict = {"Accept": "application/json"}
        headers.update(self._get_auth_header())

        url = f"{self._get_base_url().rstrip('/')}{endpoint}"
        try:
            response = await self._client.request(method, url, headers=headers, json=json, timeout=self.timeout)
        except httpx.HTTPError as e:
            self.logging.error("Request to %s failed: %s", url, e)
            raise TransportFailure(message=f"Request to {url} failed: {e}") from e

        if raise_on_error and response.status_code >= 300:
            self.logging.error(
                "Request to %s failed with status %d: %s",
                url,
                response.status_code,
                response.text,
            )
            raise TransportFailure(
                message=f"Request to {url} failed with status {response.status_code}",
                body=self._parse_error_body(response),
                status_code=response.status_code,
            )

        return response
