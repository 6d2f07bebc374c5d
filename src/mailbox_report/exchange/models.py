"""Data models for Exchange admin cmdlet results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# InvokeCommand request keys
CMDLET_INPUT = "CmdletInput"
CMDLET_NAME = "CmdletName"
CMDLET_PARAMETERS = "Parameters"

# OData response keys
ODATA_NEXT_LINK = "@odata.nextLink"
ODATA_VALUE = "value"

# Cmdlet result field names
FIELD_IDENTITY = "Identity"
FIELD_DISPLAY_NAME = "DisplayName"
FIELD_PRIMARY_SMTP_ADDRESS = "PrimarySmtpAddress"
FIELD_DATABASE = "Database"
FIELD_ISSUE_WARNING_QUOTA = "IssueWarningQuota"
FIELD_PROHIBIT_SEND_QUOTA = "ProhibitSendQuota"
FIELD_PROHIBIT_SEND_RECEIVE_QUOTA = "ProhibitSendReceiveQuota"
FIELD_FOLDER_PATH = "FolderPath"
FIELD_FOLDER_TYPE = "FolderType"
FIELD_ITEMS_IN_FOLDER = "ItemsInFolder"
FIELD_ITEMS_IN_FOLDER_AND_SUBFOLDERS = "ItemsInFolderAndSubfolders"
FIELD_FOLDER_AND_SUBFOLDER_SIZE = "FolderAndSubfolderSize"
FIELD_TOTAL_ITEM_SIZE = "TotalItemSize"


def _text(raw: dict[str, Any], key: str) -> str:
    """Return a field as a stripped string, or "" when missing or null."""
    value = raw.get(key)
    if value is None:
        return ""
    return str(value).strip()


def _optional_text(raw: dict[str, Any], key: str) -> str | None:
    value = _text(raw, key)
    return value or None


def _count(raw: dict[str, Any], key: str) -> int:
    """Return a field as a non-negative int, or 0 when missing or invalid."""
    try:
        return max(int(raw.get(key) or 0), 0)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class MailboxInfo:
    """A mailbox as returned by ``Get-Mailbox``.

    Quota fields hold the raw quota text (e.g. "49 GB (52,613,349,376 bytes)"
    or "Unlimited"), or None when the field is absent.
    """

    identity: str
    display_name: str
    database: str
    issue_warning_quota: str | None
    prohibit_send_quota: str | None
    prohibit_send_receive_quota: str | None

    @classmethod
    def from_raw(cls, raw: dict[str, Any], identity: str = "") -> MailboxInfo:
        """Map a raw cmdlet result row to a MailboxInfo."""
        return cls(
            identity=(
                _text(raw, FIELD_PRIMARY_SMTP_ADDRESS) or _text(raw, FIELD_IDENTITY) or identity
            ),
            display_name=_text(raw, FIELD_DISPLAY_NAME),
            database=_text(raw, FIELD_DATABASE),
            issue_warning_quota=_optional_text(raw, FIELD_ISSUE_WARNING_QUOTA),
            prohibit_send_quota=_optional_text(raw, FIELD_PROHIBIT_SEND_QUOTA),
            prohibit_send_receive_quota=_optional_text(raw, FIELD_PROHIBIT_SEND_RECEIVE_QUOTA),
        )


@dataclass(frozen=True)
class QuotaDefaults:
    """Organization-level quota defaults from the mailbox database."""

    issue_warning_quota: str | None = None
    prohibit_send_quota: str | None = None
    prohibit_send_receive_quota: str | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> QuotaDefaults:
        return cls(
            issue_warning_quota=_optional_text(raw, FIELD_ISSUE_WARNING_QUOTA),
            prohibit_send_quota=_optional_text(raw, FIELD_PROHIBIT_SEND_QUOTA),
            prohibit_send_receive_quota=_optional_text(raw, FIELD_PROHIBIT_SEND_RECEIVE_QUOTA),
        )


@dataclass(frozen=True)
class FolderStatistic:
    """One row of ``Get-MailboxFolderStatistics`` output."""

    path: str
    folder_type: str
    item_count: int
    subfolder_item_count: int
    size_text: str

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> FolderStatistic:
        return cls(
            path=_text(raw, FIELD_FOLDER_PATH),
            folder_type=_text(raw, FIELD_FOLDER_TYPE),
            item_count=_count(raw, FIELD_ITEMS_IN_FOLDER),
            subfolder_item_count=_count(raw, FIELD_ITEMS_IN_FOLDER_AND_SUBFOLDERS),
            size_text=_text(raw, FIELD_FOLDER_AND_SUBFOLDER_SIZE),
        )
