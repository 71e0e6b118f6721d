"""Column parsing shared by the SQLite row mappers."""

from datetime import date, datetime

from agroledger.config import get_logger

logger = get_logger(__name__)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO timestamp column; unreadable values become None."""
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except (ValueError, TypeError):
        logger.warning("unparseable_timestamp", value=value)
        return None


def parse_date(value: str | None) -> date | None:
    """Parse an ISO date column; unreadable values become None."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (ValueError, TypeError):
        logger.warning("unparseable_date", value=value)
        return None
