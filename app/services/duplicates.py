"""Проверка дубликатов участников внутри дома."""
from abc import ABC, abstractmethod
from typing import Iterable, Optional

from app.models.info_log import InfoLog
from app.models.member import HouseMember


class DuplicateGuard(ABC):
    """Политика поиска дубликатов при создании участника из заявки."""

    @abstractmethod
    def is_duplicate(self, house_id: int, log: InfoLog, members: Iterable[HouseMember]) -> bool:
        pass


class LineIdDuplicateGuard(DuplicateGuard):
    """
    Дубликат - участник того же дома с тем же line_id.

    Если у заявки нет line_id, проверка не выполняется.
    """

    def is_duplicate(self, house_id: int, log: InfoLog, members: Iterable[HouseMember]) -> bool:
        return is_duplicate(house_id, log.line_id, members)


class EmailDuplicateGuard(DuplicateGuard):
    """Более строгая политика: совпадение line_id или email внутри дома."""

    def is_duplicate(self, house_id: int, log: InfoLog, members: Iterable[HouseMember]) -> bool:
        members = list(members)
        if is_duplicate(house_id, log.line_id, members):
            return True
        email = (log.email or "").strip().lower()
        if not email:
            return False
        return any(
            m.house_id == house_id and (m.member_email or "").strip().lower() == email
            for m in members
        )


def is_duplicate(house_id: int, external_id: Optional[str], members: Iterable[HouseMember]) -> bool:
    """Есть ли в доме участник с тем же внешним идентификатором."""
    if not external_id:
        return False
    return any(m.house_id == house_id and m.line_id == external_id for m in members)
