"""Создание участников дома из заявок InfoLog."""
import enum
import logging
import threading
import weakref
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, NamedTuple, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.models.house import House
from app.models.info_log import InfoLog
from app.models.member import HouseMember
from app.repositories.house import HouseRepository
from app.repositories.member import MemberRepository
from app.services.capacity import CapacityPolicy
from app.services.duplicates import DuplicateGuard, LineIdDuplicateGuard
from app.services.status import MembershipStatus, evaluate_status
from app.utils.dates import utcnow

logger = logging.getLogger(__name__)


class ProvisionOutcome(str, enum.Enum):
    """Итог попытки создать участника из заявки."""
    CREATED = "created"
    SKIPPED_NO_HOUSE_GROUP = "skipped_no_house_group"
    SKIPPED_HOUSE_NOT_FOUND = "skipped_house_not_found"
    SKIPPED_AT_CAPACITY = "skipped_at_capacity"
    SKIPPED_DUPLICATE = "skipped_duplicate"
    FAILED = "failed"


class ProvisionResult(NamedTuple):
    """Результат provision() с метаинформацией."""
    outcome: ProvisionOutcome
    member_id: Optional[int] = None  # Заполняется только для CREATED
    reason: Optional[str] = None  # Причина для FAILED


# Блокировка удаляется из словаря, когда её больше никто не держит
_house_locks: "weakref.WeakValueDictionary[int, threading.Lock]" = weakref.WeakValueDictionary()
_house_locks_guard = threading.Lock()


@contextmanager
def _house_lock(house_id: int):
    """Блокировка проверки вместимости и вставки в пределах одного дома (в рамках процесса)."""
    with _house_locks_guard:
        lock = _house_locks.get(house_id)
        if lock is None:
            lock = threading.Lock()
            _house_locks[house_id] = lock
    with lock:
        yield


class MemberProvisioner:
    """
    Сервис создания участника дома из заявки.

    Проверки выполняются строго по порядку, первая сработавшая завершает
    обработку без записи в БД:
    1. У заявки нет house_group
    2. Дом с таким номером не найден
    3. В доме нет свободных мест
    4. Участник с таким line_id уже есть в доме
    Иначе создаётся ровно один участник.

    Ошибки хранилища не пробрасываются, а возвращаются как FAILED.

    Шаги 3-4 и вставка выполняются под блокировкой дома. Блокировка
    действует только внутри одного процесса и имеет смысл при вызове
    из нескольких потоков; async-роуты и так выполняются последовательно
    в цикле событий. Для нескольких воркеров нужна блокировка в БД.
    """

    def __init__(
        self,
        houses: HouseRepository,
        members: MemberRepository,
        policy: Optional[CapacityPolicy] = None,
        duplicate_guard: Optional[DuplicateGuard] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.houses = houses
        self.members = members
        self.policy = policy or CapacityPolicy()
        self.duplicate_guard = duplicate_guard or LineIdDuplicateGuard()
        self.clock = clock

    @classmethod
    def from_session(cls, db: Session, **kwargs) -> "MemberProvisioner":
        """Собрать сервис поверх сессии с политикой вместимости из настроек."""
        settings = get_settings()
        kwargs.setdefault("policy", CapacityPolicy(
            limit=settings.HOUSE_CAPACITY,
            count_expired_toward_capacity=settings.COUNT_EXPIRED_TOWARD_CAPACITY,
        ))
        return cls(HouseRepository(db), MemberRepository(db), **kwargs)

    def provision(self, log: InfoLog) -> ProvisionResult:
        """Создать участника из заявки, если позволяют проверки."""
        log_id = log.id
        house_group = log.house_group

        if not house_group:
            logger.info(f"Участник не создан: у заявки {log_id} нет house_group")
            return ProvisionResult(ProvisionOutcome.SKIPPED_NO_HOUSE_GROUP)

        try:
            house = self.houses.find_by_number(house_group)
            if house is None:
                logger.info(f"Участник не создан: дом {house_group} не найден (заявка {log_id})")
                return ProvisionResult(ProvisionOutcome.SKIPPED_HOUSE_NOT_FOUND)

            with _house_lock(house.id):
                now = self.clock()
                members = self.members.list_all()

                if not self.policy.has_capacity(house.id, members, now):
                    occupancy = self.policy.occupancy(house.id, members, now)
                    logger.info(
                        f"Участник не создан: дом {house_group} заполнен "
                        f"({occupancy}/{self.policy.limit}), заявка {log_id}"
                    )
                    return ProvisionResult(ProvisionOutcome.SKIPPED_AT_CAPACITY)

                if self.duplicate_guard.is_duplicate(house.id, log, members):
                    logger.info(f"Участник уже есть в доме {house_group} (заявка {log_id})")
                    return ProvisionResult(ProvisionOutcome.SKIPPED_DUPLICATE)

                member = self.members.insert(self._build_member(house, log, now))

        except SQLAlchemyError as e:
            self.members.db.rollback()
            logger.error(
                f"Ошибка при создании участника из заявки {log_id} (дом {house_group}): {e}",
                exc_info=True
            )
            return ProvisionResult(ProvisionOutcome.FAILED, reason=str(e))

        logger.info(f"✓ Создан участник {member.customer_name} в доме {house_group} (заявка {log_id})")
        return ProvisionResult(ProvisionOutcome.CREATED, member_id=member.id)

    @staticmethod
    def _build_member(house: House, log: InfoLog, now: datetime) -> HouseMember:
        status = evaluate_status(log.expiration_date, now)
        return HouseMember(
            house_id=house.id,
            member_email=log.email or "",
            line_id=log.line_id,
            phone_number=log.phone_number,
            customer_name=log.customer_name,
            email=log.email,
            registration_date=log.registration_date,
            expiration_date=log.expiration_date,
            package=log.package,
            package_price=log.package_price,
            channel=log.channel,
            status=status.value,
            is_active=status is MembershipStatus.ACTIVE,
        )
