"""Вычисление производного статуса участника по дате окончания."""
import enum
from datetime import datetime
from typing import Optional

from app.utils.dates import as_utc, utcnow


class MembershipStatus(str, enum.Enum):
    """Производный статус участника."""
    ACTIVE = "active"
    EXPIRED = "expired"


def evaluate_status(expiration_date: Optional[datetime], now: Optional[datetime] = None) -> MembershipStatus:
    """
    Вычислить статус участника.

    Нет даты окончания - бессрочно активен. Дата окончания, равная now,
    ещё считается активной.
    """
    if expiration_date is None:
        return MembershipStatus.ACTIVE
    now = as_utc(now) if now is not None else utcnow()
    if as_utc(expiration_date) >= now:
        return MembershipStatus.ACTIVE
    return MembershipStatus.EXPIRED


def is_effectively_active(expiration_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    return evaluate_status(expiration_date, now) is MembershipStatus.ACTIVE


def days_expired(expiration_date: Optional[datetime], now: Optional[datetime] = None) -> Optional[int]:
    """Сколько полных дней прошло с даты окончания (None, если даты нет)."""
    if expiration_date is None:
        return None
    now = as_utc(now) if now is not None else utcnow()
    return (now - as_utc(expiration_date)).days
