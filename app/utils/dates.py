"""Утилиты для работы с датами."""
from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """Текущее время в UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Привести datetime к aware UTC.

    SQLite возвращает naive значения, поэтому naive считается UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
