"""Data models for mailbox usage reports."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from mailbox_report.usage.sizes import parse_size


@dataclass(frozen=True)
class FolderSizeRecord:
    """Size and item counts of one mailbox folder.

    Attributes:
        path: Folder path (e.g. "/Inbox/Projects").
        folder_type: Server folder type (e.g. "Inbox", "User Created").
        item_count: Items directly in the folder.
        subfolder_item_count: Items in the folder and all of its subfolders.
        raw_size_text: Size text exactly as the server reported it.
        size_mb: Parsed size in megabytes (0.0 when unrecognised).
        size_display: Normalised size text, or "N/A" when unrecognised.
    """

    path: str
    folder_type: str
    item_count: int
    subfolder_item_count: int
    raw_size_text: str
    size_mb: float
    size_display: str

    @classmethod
    def from_size_text(
        cls,
        path: str,
        folder_type: str,
        item_count: int,
        subfolder_item_count: int,
        raw_size_text: str,
    ) -> FolderSizeRecord:
        """Build a record, parsing ``raw_size_text`` into megabytes."""
        parsed = parse_size(raw_size_text)
        return cls(
            path=path,
            folder_type=folder_type,
            item_count=item_count,
            subfolder_item_count=subfolder_item_count,
            raw_size_text=raw_size_text,
            size_mb=parsed.size_mb,
            size_display=parsed.display,
        )


@dataclass(frozen=True)
class Report:
    """Usage report for a single mailbox.

    Quota fields are in megabytes, or None when configured at neither the
    mailbox nor the database level. ``free_space_mb`` is None when the send
    quota is unset and may be negative when the mailbox is over quota.
    """

    identity: str
    display_name: str
    database: str
    folders: tuple[FolderSizeRecord, ...] = field(default_factory=tuple)
    total_used_mb: float = 0.0
    server_total_item_size: str = ""
    issue_warning_mb: float | None = None
    prohibit_send_mb: float | None = None
    prohibit_send_receive_mb: float | None = None
    free_space_mb: float | None = None

    @property
    def usage_percent(self) -> float | None:
        """Percentage of the send quota in use, or None if not computable."""
        if not self.prohibit_send_mb:
            return None
        return round(self.total_used_mb / self.prohibit_send_mb * 100, 2)

    @property
    def is_over_quota(self) -> bool:
        return self.free_space_mb is not None and self.free_space_mb < 0

    def to_dict(self, top: int | None = None) -> dict[str, Any]:
        """Serialize this report to a JSON-compatible dict.

        Args:
            top: Include only the first ``top`` folders when set. Totals and
                quotas always cover every folder.
        """
        folders = self.folders if top is None else self.folders[:top]
        return {
            "identity": self.identity,
            "display_name": self.display_name,
            "database": self.database,
            "folders": [
                {
                    "path": f.path,
                    "folder_type": f.folder_type,
                    "item_count": f.item_count,
                    "subfolder_item_count": f.subfolder_item_count,
                    "raw_size_text": f.raw_size_text,
                    "size_mb": f.size_mb,
                    "size_display": f.size_display,
                }
                for f in folders
            ],
            "total_used_mb": self.total_used_mb,
            "server_total_item_size": self.server_total_item_size,
            "issue_warning_mb": self.issue_warning_mb,
            "prohibit_send_mb": self.prohibit_send_mb,
            "prohibit_send_receive_mb": self.prohibit_send_receive_mb,
            "free_space_mb": self.free_space_mb,
            "usage_percent": self.usage_percent,
            "over_quota": self.is_over_quota,
        }
