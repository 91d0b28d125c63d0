"""API роуты для участников домов."""
import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from app.api.deps import get_capacity_policy
from app.database import get_db
from app.models.member import HouseMember
from app.repositories.house import HouseRepository
from app.repositories.member import MemberRepository
from app.schemas.house import HouseResponse
from app.schemas.member import MemberCreate, MemberUpdate, MemberResponse, ExpiredMemberResponse
from app.services.auth import get_current_user
from app.services.capacity import CapacityPolicy
from app.services.membership import active_members, available_houses, expired_members
from app.services.status import MembershipStatus, evaluate_status

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/members", tags=["members"], dependencies=[Depends(get_current_user)])


def _get_member_or_404(repo: MemberRepository, member_id: int) -> HouseMember:
    member = repo.get(member_id)
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Участник с ID {member_id} не найден"
        )
    return member


def _ensure_house_exists(db: Session, house_id: int):
    house = HouseRepository(db).find_by_id(house_id)
    if not house:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Дом с ID {house_id} не найден"
        )
    return house


def _derived_status_fields(expiration_date) -> dict:
    member_status = evaluate_status(expiration_date)
    return {"status": member_status.value, "is_active": member_status is MembershipStatus.ACTIVE}


@router.get("", response_model=List[MemberResponse])
async def list_members(
    house_id: Optional[int] = Query(None, description="Фильтр по ID дома"),
    db: Session = Depends(get_db),
):
    repo = MemberRepository(db)
    if house_id is not None:
        return repo.list_by_house(house_id)
    return repo.list_all()


@router.get("/available-houses", response_model=List[HouseResponse])
async def list_available_houses(
    db: Session = Depends(get_db),
    policy: CapacityPolicy = Depends(get_capacity_policy),
):
    """Дома, в которых есть свободные места."""
    return available_houses(HouseRepository(db).list_all(), MemberRepository(db).list_all(), policy)


@router.get("/active", response_model=List[MemberResponse])
async def list_active_members(db: Session = Depends(get_db)):
    """Активные на текущий момент участники, отсортированные по номеру дома."""
    return active_members(MemberRepository(db).list_all(), HouseRepository(db).list_all())


@router.get("/expired", response_model=List[ExpiredMemberResponse])
async def list_expired_members(db: Session = Depends(get_db)):
    """Истёкшие участники, последние истёкшие первыми."""
    return expired_members(MemberRepository(db).list_all())


@router.get("/{member_id}", response_model=MemberResponse)
async def get_member(member_id: int, db: Session = Depends(get_db)):
    return _get_member_or_404(MemberRepository(db), member_id)


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
async def create_member(
    member: MemberCreate,
    db: Session = Depends(get_db),
    policy: CapacityPolicy = Depends(get_capacity_policy),
):
    """
    Создать участника вручную.

    Проверяет существование дома и наличие свободного места.
    """
    house = _ensure_house_exists(db, member.house_id)
    repo = MemberRepository(db)
    if not policy.has_capacity(house.id, repo.list_by_house(house.id)):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"В доме {house.house_number} нет свободных мест"
        )

    fields = member.model_dump()
    fields.update(_derived_status_fields(member.expiration_date))
    created = repo.insert(HouseMember(**fields))
    logger.info(f"Создан участник {created.member_email} в доме {house.house_number}")
    return created


@router.patch("/{member_id}", response_model=MemberResponse)
async def update_member(member_id: int, member: MemberUpdate, db: Session = Depends(get_db)):
    """
    Обновить участника.

    Перенос в другой дом не проверяет вместимость.
    """
    repo = MemberRepository(db)
    existing = _get_member_or_404(repo, member_id)
    fields = member.model_dump(exclude_unset=True)

    if "house_id" in fields and fields["house_id"] != existing.house_id:
        _ensure_house_exists(db, fields["house_id"])
    if "expiration_date" in fields:
        fields.update(_derived_status_fields(fields["expiration_date"]))

    return repo.update(existing, fields)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_member(member_id: int, db: Session = Depends(get_db)):
    repo = MemberRepository(db)
    repo.delete(_get_member_or_404(repo, member_id))
    return None
