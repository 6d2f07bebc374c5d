"""Unit tests for usage/models.py — folder records and reports."""

import json

import pytest

from mailbox_report.usage.models import FolderSizeRecord, Report


def _record(path: str, size_text: str) -> FolderSizeRecord:
    return FolderSizeRecord.from_size_text(
        path=path,
        folder_type="User Created",
        item_count=3,
        subfolder_item_count=5,
        raw_size_text=size_text,
    )


class TestFolderSizeRecord:
    def test_from_size_text_parses_size(self) -> None:
        record = _record("/Inbox", "1.5 GB (1,610,612,736 bytes)")
        assert record.size_mb == 1536.0
        assert record.size_display == "1.5 GB"
        assert record.raw_size_text == "1.5 GB (1,610,612,736 bytes)"

    def test_unrecognised_size_keeps_raw_text(self) -> None:
        record = _record("/Drafts", "0 B (0 bytes)")
        assert record.size_mb == 0.0
        assert record.size_display == "N/A"
        assert record.raw_size_text == "0 B (0 bytes)"

    def test_is_immutable(self) -> None:
        record = _record("/Inbox", "1 MB")
        with pytest.raises(AttributeError):
            record.size_mb = 2.0  # type: ignore[misc]


class TestReport:
    def test_usage_percent(self) -> None:
        report = Report("a", "A", "DB", total_used_mb=512.0, prohibit_send_mb=1024.0)
        assert report.usage_percent == 50.0

    def test_usage_percent_not_computable_without_quota(self) -> None:
        assert Report("a", "A", "DB", total_used_mb=512.0).usage_percent is None
        assert Report("a", "A", "DB", prohibit_send_mb=0.0).usage_percent is None

    def test_is_over_quota(self) -> None:
        assert Report("a", "A", "DB", free_space_mb=-1.0).is_over_quota is True
        assert Report("a", "A", "DB", free_space_mb=0.0).is_over_quota is False
        assert Report("a", "A", "DB", free_space_mb=None).is_over_quota is False

    def test_to_dict_is_json_serialisable(self) -> None:
        report = Report(
            identity="alice@contoso.com",
            display_name="Alice",
            database="DB01",
            folders=(_record("/Inbox", "200 MB"),),
            total_used_mb=200.0,
            server_total_item_size="200.1 MB (209,820,000 bytes)",
            issue_warning_mb=None,
            prohibit_send_mb=100.0,
            free_space_mb=-100.0,
        )

        data = json.loads(json.dumps(report.to_dict()))

        assert data["identity"] == "alice@contoso.com"
        assert data["folders"][0]["path"] == "/Inbox"
        assert data["folders"][0]["size_mb"] == 200.0
        assert data["issue_warning_mb"] is None
        assert data["free_space_mb"] == -100.0
        assert data["over_quota"] is True
        assert data["usage_percent"] == 200.0

    def test_to_dict_top_limits_folders_only(self) -> None:
        report = Report(
            identity="alice@contoso.com",
            display_name="Alice",
            database="DB01",
            folders=(_record("/Inbox", "300 MB"), _record("/Sent", "100 MB")),
            total_used_mb=400.0,
        )

        data = report.to_dict(top=1)

        assert [f["path"] for f in data["folders"]] == ["/Inbox"]
        assert data["total_used_mb"] == 400.0
        assert len(report.to_dict()["folders"]) == 2
