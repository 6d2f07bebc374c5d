"""Report builder — orchestrates mailbox lookups into a usage report."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from mailbox_report.exchange.directory import MailboxDirectory, mailbox_directory_from_config
from mailbox_report.usage.models import FolderSizeRecord, Report
from mailbox_report.usage.quota import free_space, quota_from_text, resolve_quota
from mailbox_report.usage.sizes import NOT_AVAILABLE

if TYPE_CHECKING:
    from mailbox_report.config import AppConfig
    from mailbox_report.exchange.models import FolderStatistic

logger = logging.getLogger(__name__)


def build_folder_records(folders: Iterable[FolderStatistic]) -> list[FolderSizeRecord]:
    """Parse folder statistics and sort them by size, largest first.

    Args:
        folders: Folder statistics from the server.

    Returns:
        FolderSizeRecord list sorted by size_mb descending. Ties keep server order.
    """
    records = [
        FolderSizeRecord.from_size_text(
            path=folder.path,
            folder_type=folder.folder_type,
            item_count=folder.item_count,
            subfolder_item_count=folder.subfolder_item_count,
            raw_size_text=folder.size_text,
        )
        for folder in folders
    ]
    unparsed = sum(1 for r in records if r.size_display == NOT_AVAILABLE and r.raw_size_text)
    if unparsed:
        logger.info("[build_folder_records] unrecognised folder sizes; folder_count:%d", unparsed)
    return sorted(records, key=lambda r: r.size_mb, reverse=True)


def total_used(records: Iterable[FolderSizeRecord]) -> float:
    """Sum the parsed folder sizes in megabytes, rounded to two decimals."""
    return round(sum(r.size_mb for r in records), 2)


class ReportBuilder:
    """Builds a Report for one mailbox from directory lookups."""

    def __init__(self, directory: MailboxDirectory) -> None:
        """Initialise the report builder.

        Args:
            directory: MailboxDirectory used for all server lookups.
        """
        self._directory = directory

    def generate_report(self, identity: str) -> Report:
        """Run the lookups for a mailbox and assemble its usage report.

        Steps:
            1. Resolve the mailbox (fatal if it cannot be found).
            2. Fetch the database quota defaults (optional).
            3. Fetch and parse folder statistics; sum the parsed sizes.
            4. Fetch the server-reported total for display only.
            5. Resolve each quota (mailbox, then database) and compute free space.

        Args:
            identity: Mailbox identity (UPN, SMTP address, alias, or GUID).

        Returns:
            The completed Report.

        Raises:
            MailboxLookupError: If the mailbox cannot be resolved.
        """
        logger.info("[generate_report] starting report; identity:%s", identity)
        mailbox = self._directory.get_mailbox(identity)
        defaults = self._directory.get_database_quotas(mailbox.database)

        records = build_folder_records(self._directory.get_folder_statistics(identity))
        used_mb = total_used(records)
        server_total = self._directory.get_total_item_size(identity)

        issue_warning = resolve_quota(
            quota_from_text(mailbox.issue_warning_quota),
            quota_from_text(defaults.issue_warning_quota),
        )
        prohibit_send = resolve_quota(
            quota_from_text(mailbox.prohibit_send_quota),
            quota_from_text(defaults.prohibit_send_quota),
        )
        prohibit_send_receive = resolve_quota(
            quota_from_text(mailbox.prohibit_send_receive_quota),
            quota_from_text(defaults.prohibit_send_receive_quota),
        )

        report = Report(
            identity=mailbox.identity,
            display_name=mailbox.display_name,
            database=mailbox.database,
            folders=tuple(records),
            total_used_mb=used_mb,
            server_total_item_size=server_total,
            issue_warning_mb=issue_warning,
            prohibit_send_mb=prohibit_send,
            prohibit_send_receive_mb=prohibit_send_receive,
            free_space_mb=free_space(prohibit_send, used_mb),
        )
        logger.info(
            "[generate_report] report complete; identity:%s;folder_count:%d;total_used_mb:%.2f",
            report.identity,
            len(records),
            used_mb,
        )
        return report


def report_builder_from_config(config: AppConfig) -> ReportBuilder:
    """Construct a ReportBuilder from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured ReportBuilder instance.
    """
    return ReportBuilder(directory=mailbox_directory_from_config(config))
