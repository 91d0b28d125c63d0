"""Выборки участников и домов по производному статусу."""
import re
from datetime import datetime
from typing import Dict, Iterable, List, NamedTuple, Optional

from app.models.house import House
from app.models.member import HouseMember
from app.services.capacity import CapacityPolicy
from app.services.status import MembershipStatus, evaluate_status
from app.utils.dates import as_utc, utcnow

_DIGITS = re.compile(r"(\d+)")


class HouseOccupancy(NamedTuple):
    """Дом с количеством участников и свободных мест."""
    house: House
    member_count: int
    capacity_remaining: int


def natural_key(value: Optional[str]) -> tuple:
    """Ключ сортировки, при котором "A2" идёт раньше "A10"."""
    parts = _DIGITS.split((value or "").lower())
    return tuple((0, int(part), "") if part.isdigit() else (1, 0, part) for part in parts if part)


def active_members(
    members: Iterable[HouseMember],
    houses: Iterable[House],
    now: Optional[datetime] = None,
) -> List[HouseMember]:
    """Активные участники, отсортированные по номеру дома."""
    now = now or utcnow()
    numbers: Dict[int, str] = {h.id: h.house_number for h in houses}
    result = [m for m in members if evaluate_status(m.expiration_date, now) is MembershipStatus.ACTIVE]
    result.sort(key=lambda m: (natural_key(numbers.get(m.house_id, "")), m.id))
    return result


def expired_members(members: Iterable[HouseMember], now: Optional[datetime] = None) -> List[HouseMember]:
    """Истёкшие участники, последние истёкшие первыми."""
    now = now or utcnow()
    result = [m for m in members if evaluate_status(m.expiration_date, now) is MembershipStatus.EXPIRED]
    result.sort(key=lambda m: as_utc(m.expiration_date), reverse=True)
    return result


def house_occupancy(
    houses: Iterable[House],
    members: Iterable[HouseMember],
    policy: CapacityPolicy,
    now: Optional[datetime] = None,
) -> List[HouseOccupancy]:
    members = list(members)
    return [
        HouseOccupancy(
            house=house,
            member_count=policy.occupancy(house.id, members, now),
            capacity_remaining=policy.capacity_remaining(house.id, members, now),
        )
        for house in houses
    ]


def available_houses(
    houses: Iterable[House],
    members: Iterable[HouseMember],
    policy: CapacityPolicy,
    now: Optional[datetime] = None,
) -> List[House]:
    """Дома, в которых ещё есть свободные места."""
    members = list(members)
    return [house for house in houses if policy.has_capacity(house.id, members, now)]
