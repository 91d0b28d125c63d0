"""Контроль вместимости домов."""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from app.models.member import HouseMember
from app.services.status import is_effectively_active

DEFAULT_HOUSE_CAPACITY = 5


@dataclass(frozen=True)
class CapacityPolicy:
    """
    Политика вместимости дома.

    По умолчанию место занимает любая запись участника, в том числе
    с истёкшей датой окончания.
    """
    limit: int = DEFAULT_HOUSE_CAPACITY
    count_expired_toward_capacity: bool = True

    def occupancy(
        self,
        house_id: int,
        members: Iterable[HouseMember],
        now: Optional[datetime] = None,
    ) -> int:
        """Количество занятых мест в доме."""
        count = 0
        for member in members:
            if member.house_id != house_id:
                continue
            if not self.count_expired_toward_capacity and not is_effectively_active(member.expiration_date, now):
                continue
            count += 1
        return count

    def capacity_remaining(
        self,
        house_id: int,
        members: Iterable[HouseMember],
        now: Optional[datetime] = None,
    ) -> int:
        """Количество свободных мест (не меньше 0)."""
        return max(self.limit - self.occupancy(house_id, members, now), 0)

    def has_capacity(
        self,
        house_id: int,
        members: Iterable[HouseMember],
        now: Optional[datetime] = None,
    ) -> bool:
        return self.occupancy(house_id, members, now) < self.limit
