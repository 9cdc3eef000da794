"""Tests for the Salesforce Apex REST cursor transport."""

import json
import os
from unittest.mock import patch

import httpx
import pytest

from pager.clients.cursor.salesforce.CursorTransportSalesforce import CursorTransportSalesforce
from pager.errors.failures import ApplicationFailure, TransportFailure
from pager.models.cursor import CursorToken

BASE_URL = "https://example.my.salesforce.com"

ENV = {
    "CURSOR_SALESFORCE_BASE_URL": BASE_URL,
    "CURSOR_SALESFORCE_ACCESS_TOKEN": "00Dxx!token",
}

STANDARD_RESPONSE = {
    "cursor": {"locator": "std-1"},
    "records": [{"Id": "001A", "Name": "Acme", "Industry": "Energy", "Phone": "555-0100", "CreatedDate": "2024-05-01T10:00:00.000Z"}],
    "currentPage": 1,
    "totalPages": 3,
    "totalRecords": 25,
}

ADVANCING_RESPONSE = {
    "paginationCursor": "pag-2",
    "records": [{"Id": "001B", "Name": "Globex"}],
    "currentPage": 2,
    "totalRecords": 24,
    "nextIndex": 22,
    "deletedRows": 2,
    "hasMorePages": True,
}


@pytest.fixture
def env():
    with patch.dict(os.environ, ENV):
        yield


@pytest.fixture
def transport(helper_config, env) -> CursorTransportSalesforce:
    return CursorTransportSalesforce(helper_config=helper_config)


def _recording_handler(requests: list, status_code: int = 200, payload=None):
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=payload)
    return handler


class TestConfiguration:

    def test_missing_base_url(self, helper_config):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="CURSOR_SALESFORCE_BASE_URL"):
                CursorTransportSalesforce(helper_config=helper_config)

    def test_engine_and_type(self, transport):
        assert transport.get_client_type() == "cursor"
        assert transport.get_engine_name() == "salesforce"
        assert transport.timeout == 30.0

    def test_custom_resources(self, helper_config):
        with patch.dict(os.environ, {**ENV, "CURSOR_SALESFORCE_PAGINATION_RESOURCE": "/accounts/paged/"}):
            transport = CursorTransportSalesforce(helper_config=helper_config)

        assert transport._get_endpoint_advancing_page() == "/services/apexrest/accounts/paged/page"


    def test_unsupported_value_type(self, transport):
        with pytest.raises(ValueError, match="Unsupported config value type 'list'"):
            transport.get_config_val("STANDARD_RESOURCE", default="x", val_type="list")

    @pytest.mark.asyncio
    async def test_sends_only_accept_and_auth_headers(self, transport):
        requests = []
        await transport.boot(transport=httpx.MockTransport(_recording_handler(requests, payload={})))
        try:
            await transport.do_healthcheck()
        finally:
            await transport.close()

        assert requests[0].headers["Accept"] == "application/json"
        assert requests[0].headers["Authorization"] == "Bearer 00Dxx!token"
        assert requests[0].url.query == b""


class TestStandard:

    @pytest.mark.asyncio
    async def test_init(self, transport):
        requests = []
        await transport.boot(transport=httpx.MockTransport(_recording_handler(requests, payload=STANDARD_RESPONSE)))
        try:
            result = await transport.do_init_standard()
        finally:
            await transport.close()

        assert str(requests[0].url) == f"{BASE_URL}/services/apexrest/standard-cursor/init"
        assert requests[0].method == "POST"
        assert requests[0].headers["Authorization"] == "Bearer 00Dxx!token"
        assert result.cursor == CursorToken({"locator": "std-1"})
        assert result.total_pages == 3
        assert result.total_records == 25
        assert result.records[0].Name == "Acme"

    @pytest.mark.asyncio
    async def test_get_page_echoes_cursor(self, transport):
        requests = []
        await transport.boot(transport=httpx.MockTransport(_recording_handler(requests, payload={**STANDARD_RESPONSE, "currentPage": 2})))
        try:
            result = await transport.do_get_standard_page(cursor=CursorToken({"locator": "std-1"}), page=2, page_size=10)
        finally:
            await transport.close()

        assert str(requests[0].url).endswith("/services/apexrest/standard-cursor/page")
        assert json.loads(requests[0].content) == {"cursor": {"locator": "std-1"}, "page": 2, "pageSize": 10}
        assert result.current_page == 2


class TestAdvancing:

    @pytest.mark.asyncio
    async def test_get_page(self, transport):
        requests = []
        await transport.boot(transport=httpx.MockTransport(_recording_handler(requests, payload=ADVANCING_RESPONSE)))
        try:
            result = await transport.do_get_advancing_page(cursor=CursorToken("pag-1"), start_index=10, page_size=10, page=2)
        finally:
            await transport.close()

        assert str(requests[0].url).endswith("/services/apexrest/pagination-cursor/page")
        assert json.loads(requests[0].content) == {"pagCursor": "pag-1", "startIndex": 10, "pageSize": 10, "page": 2}
        assert result.cursor.unwrap() == "pag-2"
        assert result.next_index == 22
        assert result.deleted_rows == 2
        assert result.has_more_pages is True
        assert result.total_records == 24

    @pytest.mark.asyncio
    async def test_init_without_deleted_rows(self, transport):
        payload = {key: value for key, value in ADVANCING_RESPONSE.items() if key != "deletedRows"}
        payload["currentPage"] = 1
        await transport.boot(transport=httpx.MockTransport(_recording_handler([], payload=payload)))
        try:
            result = await transport.do_init_advancing()
        finally:
            await transport.close()

        assert result.deleted_rows == 0


class TestFailures:

    @pytest.mark.asyncio
    async def test_apex_error_body_is_flattened(self, transport):
        error_body = [{"errorCode": "APEX_ERROR", "message": "System.QueryException: cursor expired"}]
        await transport.boot(transport=httpx.MockTransport(_recording_handler([], status_code=500, payload=error_body)))
        try:
            with pytest.raises(TransportFailure) as exc_info:
                await transport.do_init_advancing()
        finally:
            await transport.close()

        assert exc_info.value.status_code == 500
        assert exc_info.value.body == {"message": "System.QueryException: cursor expired", "errorCode": "APEX_ERROR"}

    @pytest.mark.asyncio
    async def test_network_error(self, transport):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        await transport.boot(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(TransportFailure, match="connection refused") as exc_info:
                await transport.do_init_standard()
        finally:
            await transport.close()

        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_malformed_response(self, transport):
        await transport.boot(transport=httpx.MockTransport(_recording_handler([], payload={"records": []})))
        try:
            with pytest.raises(TransportFailure, match="Malformed standard init response"):
                await transport.do_init_standard()
        finally:
            await transport.close()

    @pytest.mark.asyncio
    async def test_non_json_response(self, transport):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>login</html>")

        await transport.boot(transport=httpx.MockTransport(handler))
        try:
            with pytest.raises(TransportFailure, match="not JSON"):
                await transport.do_init_standard()
        finally:
            await transport.close()

    @pytest.mark.asyncio
    async def test_application_error(self, transport):
        payload = {"success": False, "errorMessage": "Insufficient access to Account"}
        await transport.boot(transport=httpx.MockTransport(_recording_handler([], payload=payload)))
        try:
            with pytest.raises(ApplicationFailure, match="Insufficient access"):
                await transport.do_init_standard()
        finally:
            await transport.close()

    @pytest.mark.asyncio
    async def test_request_before_boot(self, transport):
        with pytest.raises(RuntimeError, match="boot"):
            await transport.do_init_standard()


class TestHealthcheck:

    @pytest.mark.asyncio
    async def test_healthcheck_path(self, transport):
        requests = []
        await transport.boot(transport=httpx.MockTransport(_recording_handler(requests, payload={})))
        try:
            await transport.do_healthcheck()
        finally:
            await transport.close()

        assert requests[0].url.path == "/services/data/v60.0/limits"
        assert requests[0].method == "GET"
