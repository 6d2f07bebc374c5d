"""Smoke tests — validate the function app endpoints end-to-end."""

import json
from unittest.mock import MagicMock, patch

import azure.functions as func

from mailbox_report.exchange.client import ExchangeApiError
from mailbox_report.exchange.directory import MailboxLookupError
from mailbox_report.usage.models import Report


def _request(params: dict[str, str]) -> func.HttpRequest:
    return func.HttpRequest(method="GET", url="/api/report", body=b"", params=params)


def test_health_check_returns_status() -> None:
    """Health endpoint returns ok status with version from the package."""
    from mailbox_report.functions.http_trigger import health_check

    response = health_check(MagicMock(spec=func.HttpRequest))

    assert response.status_code == 200
    body = json.loads(response.get_body())
    assert body["status"] == "ok"
    assert body["version"] == "0.1.0"


def test_report_endpoint_returns_report() -> None:
    """Report endpoint runs the builder and returns the report as JSON."""
    from mailbox_report.functions.http_trigger import mailbox_report

    mock_builder = MagicMock()
    mock_builder.generate_report.return_value = Report(
        identity="alice@contoso.com", display_name="Alice", database="DB01"
    )

    with (
        patch("mailbox_report.functions.http_trigger.load_config"),
        patch(
            "mailbox_report.functions.http_trigger.report_builder_from_config",
            return_value=mock_builder,
        ),
    ):
        response = mailbox_report(_request({"mailbox": "alice"}))

    assert response.status_code == 200
    body = json.loads(response.get_body())
    assert body["report"]["identity"] == "alice@contoso.com"
    assert body["report"]["free_space_mb"] is None
    mock_builder.generate_report.assert_called_once_with("alice")


def test_report_endpoint_requires_mailbox() -> None:
    from mailbox_report.functions.http_trigger import mailbox_report

    response = mailbox_report(_request({}))

    assert response.status_code == 400


def test_report_endpoint_returns_404_for_unknown_mailbox() -> None:
    from mailbox_report.functions.http_trigger import mailbox_report

    mock_builder = MagicMock()
    mock_builder.generate_report.side_effect = MailboxLookupError("nobody", "no matching mailbox")

    with (
        patch("mailbox_report.functions.http_trigger.load_config"),
        patch(
            "mailbox_report.functions.http_trigger.report_builder_from_config",
            return_value=mock_builder,
        ),
    ):
        response = mailbox_report(_request({"mailbox": "nobody"}))

    assert response.status_code == 404


def test_report_endpoint_returns_500_on_unexpected_error() -> None:
    from mailbox_report.functions.http_trigger import mailbox_report

    with patch(
        "mailbox_report.functions.http_trigger.load_config", side_effect=KeyError("MR_CLIENT_ID")
    ):
        response = mailbox_report(_request({"mailbox": "alice"}))

    assert response.status_code == 500


def test_report_endpoint_returns_500_when_exchange_unavailable() -> None:
    """Throttling or an outage is a server error, not a missing mailbox."""
    from mailbox_report.functions.http_trigger import mailbox_report

    mock_builder = MagicMock()
    mock_builder.generate_report.side_effect = ExchangeApiError(503, "Service unavailable")

    with (
        patch("mailbox_report.functions.http_trigger.load_config"),
        patch(
            "mailbox_report.functions.http_trigger.report_builder_from_config",
            return_value=mock_builder,
        ),
    ):
        response = mailbox_report(_request({"mailbox": "alice"}))

    assert response.status_code == 500
