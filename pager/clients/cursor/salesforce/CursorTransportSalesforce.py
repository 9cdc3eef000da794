import httpx

from pager.clients.cursor.CursorTransportInterface import CursorTransportInterface
from pager.helper.HelperConfig import HelperConfig
from pager.models.config import EnvConfig
from pager.models.cursor import CursorToken
from pager.models.page import AdvancingPageResult, StandardPageResult


class CursorTransportSalesforce(CursorTransportInterface):
    """Talks to the cursor controllers exposed as Apex REST resources."""

    def __init__(self, helper_config: HelperConfig):
        super().__init__(helper_config=helper_config)
        self._base_url = self.get_config_val("BASE_URL", default=None, val_type="string")
        self._access_token = self.get_config_val("ACCESS_TOKEN", default="", val_type="string")
        self._api_version = self.get_config_val("API_VERSION", default="v60.0", val_type="string")
        self._standard_resource = self.get_config_val("STANDARD_RESOURCE", default="standard-cursor", val_type="string").strip("/")
        self._pagination_resource = self.get_config_val("PAGINATION_RESOURCE", default="pagination-cursor", val_type="string").strip("/")

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def _get_engine_name(self) -> str:
        return "Salesforce"

    ################ CONFIG ##################
    def _get_required_config(self) -> list[EnvConfig]:
        return [
            EnvConfig(env_key="BASE_URL", val_type="string", default=None),
            EnvConfig(env_key="ACCESS_TOKEN", val_type="string", default=""),
            EnvConfig(env_key="API_VERSION", val_type="string", default="v60.0"),
            EnvConfig(env_key="STANDARD_RESOURCE", val_type="string", default="standard-cursor"),
            EnvConfig(env_key="PAGINATION_RESOURCE", val_type="string", default="pagination-cursor"),
        ]

    ################ AUTH ##################
    def _get_auth_header(self) -> dict:
        if self._access_token:
            return {"Authorization": f"Bearer {self._access_token}"}
        else:
            return {}

    ################ ENDPOINTS ##################
    def _get_base_url(self) -> str:
        return self._base_url

    def _get_endpoint_healthcheck(self) -> str:
        return f"/services/data/{self._api_version}/limits"

    def _get_endpoint_standard_init(self) -> str:
        return f"/services/apexrest/{self._standard_resource}/init"

    def _get_endpoint_standard_page(self) -> str:
        return f"/services/apexrest/{self._standard_resource}/page"

    def _get_endpoint_advancing_init(self) -> str:
        return f"/services/apexrest/{self._pagination_resource}/init"

    def _get_endpoint_advancing_page(self) -> str:
        return f"/services/apexrest/{self._pagination_resource}/page"

    ##########################################
    ########### PAYLOAD BUILDER ##############
    ##########################################

    def get_standard_page_payload(self, cursor: CursorToken, page: int, page_size: int) -> dict:
        return {
            "cursor": cursor.unwrap(),
            "page": page,
            "pageSize": page_size,
        }

    def get_advancing_page_payload(self, cursor: CursorToken, start_index: int, page_size: int, page: int) -> dict:
        return {
            "pagCursor": cursor.unwrap(),
            "startIndex": start_index,
            "pageSize": page_size,
            "page": page,
        }

    ##########################################
    ########### RESPONSE PARSER ##############
    ##########################################

    def _parse_error_body(self, response: httpx.Response) -> dict:
        # Apex REST reports errors as [{"errorCode": ..., "message": ...}]
        try:
            body = response.json()
        except ValueError:
            return {"message": response.text} if response.text else {}
        if isinstance(body, list) and body and isinstance(body[0], dict):
            first = body[0]
            return {"message": first.get("message"), "errorCode": first.get("errorCode")}
        return body if isinstance(body, dict) else {}

    def _extract_application_error(self, response: dict) -> str | None:
        if response.get("success") is False:
            return response.get("errorMessage") or response.get("message")
        return None

    def _parse_standard_page(self, response: dict) -> StandardPageResult:
        return StandardPageResult(
            cursor=response.get("cursor"),
            records=response.get("records") or [],
            current_page=response.get("currentPage"),
            total_pages=response.get("totalPages"),
            total_records=response.get("totalRecords"),
        )

    def _parse_advancing_page(self, response: dict) -> AdvancingPageResult:
        return AdvancingPageResult(
            cursor=response.get("paginationCursor"),
            records=response.get("records") or [],
            current_page=response.get("currentPage"),
            total_records=response.get("totalRecords"),
            next_index=response.get("nextIndex"),
            deleted_rows=response.get("deletedRows") or 0,
            has_more_pages=bool(response.get("hasMorePages")),
        )
