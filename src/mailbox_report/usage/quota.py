"""Quota resolution and free-space computation."""

from __future__ import annotations

from mailbox_report.usage.sizes import match_size

# Display text for a quota that is configured at neither level.
UNSET_QUOTA_DISPLAY = "Default (N/A)"

# Display text for free space that cannot be computed.
NOT_COMPUTABLE_DISPLAY = "not computable"

# Quota text Exchange uses when no limit is configured.
UNLIMITED = "unlimited"

QuotaSetting = float | None


def quota_from_text(text: str | None) -> QuotaSetting:
    """Convert quota text to megabytes.

    Args:
        text: Quota text such as "49 GB (52,613,349,376 bytes)" or "Unlimited".

    Returns:
        Quota in megabytes, or None when the text is missing, "Unlimited",
        or has no recognised size.
    """
    if text is None or text.strip().lower() in ("", UNLIMITED):
        return None
    parsed = match_size(text)
    return None if parsed is None else parsed.size_mb


def resolve_quota(primary: QuotaSetting, fallback: QuotaSetting) -> QuotaSetting:
    """Return the effective quota: mailbox override, then database default.

    Args:
        primary: Mailbox-level quota in megabytes, or None if unset.
        fallback: Database-level default in megabytes, or None if unset.

    Returns:
        The first configured value, or None when neither level sets one.
    """
    if primary is not None:
        return primary
    if fallback is not None:
        return fallback
    return None


def free_space(prohibit_send: QuotaSetting, used_mb: float) -> float | None:
    """Return the headroom below the send quota.

    Negative results mean the mailbox is over quota and are returned as-is.

    Args:
        prohibit_send: Effective prohibit-send quota in megabytes, or None.
        used_mb: Total used space in megabytes.

    Returns:
        ``prohibit_send - used_mb``, or None when the quota is unset.
    """
    if prohibit_send is None:
        return None
    return round(prohibit_send - used_mb, 2)
