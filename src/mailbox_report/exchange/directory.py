"""Mailbox directory — read-only lookups against the Exchange admin API."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mailbox_report.exchange.client import (
    ExchangeAdminClient,
    ExchangeApiError,
    exchange_client_from_config,
)
from mailbox_report.exchange.models import (
    FIELD_IDENTITY,
    FIELD_TOTAL_ITEM_SIZE,
    FolderStatistic,
    MailboxInfo,
    QuotaDefaults,
)

if TYPE_CHECKING:
    from mailbox_report.config import AppConfig

logger = logging.getLogger(__name__)

CMDLET_GET_MAILBOX = "Get-Mailbox"
CMDLET_GET_MAILBOX_DATABASE = "Get-MailboxDatabase"
CMDLET_GET_FOLDER_STATISTICS = "Get-MailboxFolderStatistics"
CMDLET_GET_MAILBOX_STATISTICS = "Get-MailboxStatistics"

HTTP_NOT_FOUND = 404


class MailboxLookupError(Exception):
    """Raised when the target mailbox cannot be resolved."""

    def __init__(self, identity: str, reason: str) -> None:
        super().__init__(f"Mailbox '{identity}' could not be found: {reason}")
        self.identity = identity
        self.reason = reason


class MailboxDirectory:
    """Fetches mailbox, database, and folder statistics for a single mailbox."""

    def __init__(self, client: ExchangeAdminClient) -> None:
        """Initialise the directory.

        Args:
            client: Authenticated ExchangeAdminClient instance.
        """
        self._client = client

    def get_mailbox(self, identity: str) -> MailboxInfo:
        """Resolve a mailbox and its mailbox-level quota settings.

        Args:
            identity: Mailbox identity (UPN, SMTP address, alias, or GUID).

        Returns:
            MailboxInfo for the first matching mailbox.

        Raises:
            MailboxLookupError: If the API reports 404 or returns no mailbox.
            ExchangeApiError: For any other non-2xx status (throttling, outage, access).
        """
        try:
            rows = self._client.invoke_command(CMDLET_GET_MAILBOX, {FIELD_IDENTITY: identity})
        except ExchangeApiError as exc:
            if exc.status_code != HTTP_NOT_FOUND:
                raise
            logger.error("[get_mailbox] mailbox not found; identity:%s", identity)
            raise MailboxLookupError(identity, exc.message) from exc
        if not rows:
            logger.error("[get_mailbox] mailbox lookup returned no rows; identity:%s", identity)
            raise MailboxLookupError(identity, "no matching mailbox")
        return MailboxInfo.from_raw(rows[0], identity=identity)

    def get_database_quotas(self, database: str) -> QuotaDefaults:
        """Fetch the quota defaults of a mailbox database.

        The defaults are optional: a blank database name, an empty result or
        an API error all yield unset defaults.

        Args:
            database: Database name or identity from the mailbox.

        Returns:
            QuotaDefaults with whatever quota fields the database reports.
        """
        if not database:
            logger.info("[get_database_quotas] mailbox has no database; using unset defaults")
            return QuotaDefaults()
        try:
            rows = self._client.invoke_command(
                CMDLET_GET_MAILBOX_DATABASE, {FIELD_IDENTITY: database}
            )
        except ExchangeApiError as exc:
            logger.warning(
                "[get_database_quotas] database lookup failed; database:%s;status:%d",
                database,
                exc.status_code,
            )
            return QuotaDefaults()
        if not rows:
            return QuotaDefaults()
        return QuotaDefaults.from_raw(rows[0])

    def get_folder_statistics(self, identity: str) -> list[FolderStatistic]:
        """List per-folder statistics for a mailbox.

        Args:
            identity: Mailbox identity.

        Returns:
            One FolderStatistic per folder, in server order.
        """
        rows = self._client.invoke_command(
            CMDLET_GET_FOLDER_STATISTICS, {FIELD_IDENTITY: identity}
        )
        folders = [FolderStatistic.from_raw(row) for row in rows]
        logger.info(
            "[get_folder_statistics] fetched folders; identity:%s;folder_count:%d",
            identity,
            len(folders),
        )
        return folders

    def get_total_item_size(self, identity: str) -> str:
        """Return the server-reported total item size, verbatim.

        Args:
            identity: Mailbox identity.

        Returns:
            The TotalItemSize text, or "" if the server does not report one.
        """
        rows = self._client.invoke_command(
            CMDLET_GET_MAILBOX_STATISTICS, {FIELD_IDENTITY: identity}
        )
        if not rows:
            return ""
        value = rows[0].get(FIELD_TOTAL_ITEM_SIZE)
        return "" if value is None else str(value).strip()


def mailbox_directory_from_config(config: AppConfig) -> MailboxDirectory:
    """Construct a MailboxDirectory from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured MailboxDirectory instance.
    """
    return MailboxDirectory(exchange_client_from_config(config))
