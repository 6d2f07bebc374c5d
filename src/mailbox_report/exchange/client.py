"""Exchange admin REST client with MSAL authentication."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any
from urllib import request as urllib_request
from urllib.error import HTTPError, URLError

import msal

from mailbox_report.exchange.models import (
    CMDLET_INPUT,
    CMDLET_NAME,
    CMDLET_PARAMETERS,
    ODATA_NEXT_LINK,
    ODATA_VALUE,
)

if TYPE_CHECKING:
    from mailbox_report.config import AppConfig

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_API_BASE_URL = "https://outlook.office365.com/adminapi/beta"
DEFAULT_ADMIN_API_SCOPE = "https://outlook.office365.com/.default"
AUTHORITY_BASE_URL = "https://login.microsoftonline.com"

# Well-known arbitration mailbox used to route admin requests to the tenant.
ANCHOR_MAILBOX_TEMPLATE = "UPN:SystemMailbox{{bb558c35-97f1-4cb9-8ff7-d53741dc928c}}@{organization}"


class ExchangeAuthError(Exception):
    """Raised when MSAL token acquisition fails."""


class ExchangeConnectionError(Exception):
    """Raised when the admin API cannot be reached (DNS, refused connection, timeout)."""


class ExchangeApiError(Exception):
    """Raised when the admin API returns a non-2xx response."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"Exchange admin API error {status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ExchangeAdminClient:
    """Authenticated client for the Exchange admin ``InvokeCommand`` endpoint."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        tenant_id: str,
        organization: str,
        base_url: str = DEFAULT_ADMIN_API_BASE_URL,
        scope: str = DEFAULT_ADMIN_API_SCOPE,
        timeout: float = 30.0,
    ) -> None:
        """Initialise the MSAL confidential client application.

        Args:
            client_id: Azure AD application (client) ID.
            client_secret: Azure AD application client secret.
            tenant_id: Azure AD tenant ID.
            organization: Primary domain of the Exchange organization.
            base_url: Base URL of the admin REST API (no trailing slash).
            scope: OAuth scope requested for the admin API.
            timeout: HTTP timeout in seconds.
        """
        authority = f"{AUTHORITY_BASE_URL}/{tenant_id}"
        self._app = msal.ConfidentialClientApplication(
            client_id=client_id,
            client_credential=client_secret,
            authority=authority,
        )
        self._scopes = [scope]
        self._command_url = f"{base_url.rstrip('/')}/{tenant_id}/InvokeCommand"
        self._anchor_mailbox = ANCHOR_MAILBOX_TEMPLATE.format(organization=organization)
        self._timeout = timeout

    def _acquire_token(self) -> str:
        """Acquire a Bearer token using client credentials flow.

        Returns:
            Access token string.

        Raises:
            ExchangeAuthError: If MSAL cannot acquire a token.
        """
        result: dict[str, Any] = self._app.acquire_token_for_client(scopes=self._scopes) or {}
        if "access_token" not in result:
            error = result.get("error", "unknown_error")
            description = result.get("error_description", "No description provided")
            logger.error("[_acquire_token] MSAL token acquisition failed; error:%s", error)
            raise ExchangeAuthError(f"Token acquisition failed: {error}: {description}")
        return str(result["access_token"])

    def _post(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST a JSON payload and return the parsed JSON response body.

        Raises:
            ExchangeAuthError: If token acquisition fails.
            ExchangeApiError: If the API returns a non-2xx status code.
            ExchangeConnectionError: If the API cannot be reached.
        """
        token = self._acquire_token()
        req = urllib_request.Request(
            url,
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "X-ResponseFormat": "json",
                "X-AnchorMailbox": self._anchor_mailbox,
            },
            method="POST",
        )
        try:
            with urllib_request.urlopen(req, timeout=self._timeout) as resp:
                body = resp.read()
                return json.loads(body) if body else {}  # type: ignore[no-any-return]
        except HTTPError as exc:
            raw = exc.read()
            try:
                detail = json.loads(raw).get("error", {}).get("message", exc.reason)
            except Exception:
                detail = exc.reason
            raise ExchangeApiError(exc.code, detail) from exc
        except URLError as exc:
            logger.error("[_post] admin API unreachable; reason:%s", exc.reason)
            raise ExchangeConnectionError(f"Exchange admin API unreachable: {exc.reason}") from exc
        except TimeoutError as exc:
            logger.error("[_post] admin API request timed out; timeout:%s", self._timeout)
            raise ExchangeConnectionError(
                f"Exchange admin API request timed out after {self._timeout}s"
            ) from exc

    def invoke_command(
        self, cmdlet: str, parameters: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Run a read-only cmdlet through the admin API.

        Follows @odata.nextLink pagination and returns every result row.

        Args:
            cmdlet: Cmdlet name (e.g. "Get-Mailbox").
            parameters: Cmdlet parameters, keyed by parameter name.

        Returns:
            List of result objects from the ``value`` array of each page.

        Raises:
            ExchangeAuthError: If token acquisition fails.
            ExchangeApiError: If the API returns a non-2xx status code.
            ExchangeConnectionError: If the API cannot be reached.
        """
        payload = {
            CMDLET_INPUT: {
                CMDLET_NAME: cmdlet,
                CMDLET_PARAMETERS: parameters or {},
            }
        }
        rows: list[dict[str, Any]] = []
        next_url: str | None = self._command_url
        while next_url is not None:
            response = self._post(next_url, payload)
            rows.extend(response.get(ODATA_VALUE, []))
            next_url = response.get(ODATA_NEXT_LINK)
        logger.info("[invoke_command] cmdlet complete; cmdlet:%s;row_count:%d", cmdlet, len(rows))
        return rows


def exchange_client_from_config(config: AppConfig) -> ExchangeAdminClient:
    """Construct an ExchangeAdminClient from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured ExchangeAdminClient instance.
    """
    return ExchangeAdminClient(
        client_id=config.client_id,
        client_secret=config.client_secret,
        tenant_id=config.tenant_id,
        organization=config.organization,
        base_url=config.admin_api_base_url,
        scope=config.admin_api_scope,
        timeout=config.request_timeout,
    )
