"""Общие зависимости роутов."""
from fastapi import Depends
from sqlalchemy.orm import Session
from app.config import get_settings
from app.database import get_db
from app.repositories.info_log import InfoLogRepository
from app.services.capacity import CapacityPolicy
from app.services.info_log import InfoLogService
from app.services.provisioner import MemberProvisioner


def get_capacity_policy() -> CapacityPolicy:
    settings = get_settings()
    return CapacityPolicy(
        limit=settings.HOUSE_CAPACITY,
        count_expired_toward_capacity=settings.COUNT_EXPIRED_TOWARD_CAPACITY,
    )


def get_provisioner(
    db: Session = Depends(get_db),
    policy: CapacityPolicy = Depends(get_capacity_policy),
) -> MemberProvisioner:
    return MemberProvisioner.from_session(db, policy=policy)


def get_info_log_service(
    db: Session = Depends(get_db),
    provisioner: MemberProvisioner = Depends(get_provisioner),
) -> InfoLogService:
    return InfoLogService(InfoLogRepository(db), provisioner)
