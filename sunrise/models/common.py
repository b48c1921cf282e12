"""Common helpers shared across models."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def short_label(text: str, default: str) -> str:
    """First comma-separated segment of an address, e.g. '1 Market St'."""
    head = text.split(",")[0].strip()
    return head or default
