"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    Required fields have no defaults and will cause a KeyError at startup
    if the corresponding environment variable is missing. Endpoint settings
    have sensible defaults but can be overridden via environment variables.
    """

    # Required: no defaults, fail at startup if missing
    client_id: str
    client_secret: str
    tenant_id: str
    organization: str

    # Endpoint settings: defaults provided, overridable via env
    admin_api_base_url: str = "https://outlook.office365.com/adminapi/beta"
    admin_api_scope: str = "https://outlook.office365.com/.default"
    request_timeout: float = 30.0


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        MR_CLIENT_ID: Azure AD application (client) ID.
        MR_CLIENT_SECRET: Azure AD application client secret.
        MR_TENANT_ID: Azure AD tenant ID.
        MR_ORGANIZATION: Primary domain of the Exchange organization
            (e.g. contoso.onmicrosoft.com).

    Optional environment variables (with defaults):
        MR_ADMIN_API_BASE_URL: Base URL of the Exchange admin REST API.
        MR_ADMIN_API_SCOPE: OAuth scope requested for the admin API.
        MR_REQUEST_TIMEOUT: HTTP timeout in seconds (default: 30).

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig(
        client_id=os.environ["MR_CLIENT_ID"],
        client_secret=os.environ["MR_CLIENT_SECRET"],
        tenant_id=os.environ["MR_TENANT_ID"],
        organization=os.environ["MR_ORGANIZATION"],
        admin_api_base_url=os.environ.get(
            "MR_ADMIN_API_BASE_URL", "https://outlook.office365.com/adminapi/beta"
        ),
        admin_api_scope=os.environ.get(
            "MR_ADMIN_API_SCOPE", "https://outlook.office365.com/.default"
        ),
        request_timeout=float(os.environ.get("MR_REQUEST_TIMEOUT", "30")),
    )
