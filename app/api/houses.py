"""API роуты для домов."""
import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.api.deps import get_capacity_policy
from app.database import get_db
from app.repositories.house import HouseRepository
from app.repositories.member import MemberRepository
from app.schemas.house import HouseCreate, HouseUpdate, HouseResponse, HouseWithCapacityResponse
from app.services.auth import get_current_user
from app.services.capacity import CapacityPolicy
from app.services.membership import house_occupancy

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/houses", tags=["houses"], dependencies=[Depends(get_current_user)])


def _get_house_or_404(repo: HouseRepository, house_id: int):
    house = repo.find_by_id(house_id)
    if not house:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Дом с ID {house_id} не найден"
        )
    return house


def _ensure_number_free(repo: HouseRepository, house_number: str):
    if repo.find_by_number(house_number):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Дом с номером {house_number} уже существует"
        )


@router.get("", response_model=List[HouseResponse])
async def list_houses(db: Session = Depends(get_db)):
    return HouseRepository(db).list_all()


@router.get("/with-member-count", response_model=List[HouseWithCapacityResponse])
async def list_houses_with_member_count(
    db: Session = Depends(get_db),
    policy: CapacityPolicy = Depends(get_capacity_policy),
):
    """Получить дома с количеством участников и свободных мест."""
    houses = HouseRepository(db).list_all()
    members = MemberRepository(db).list_all()
    return [
        HouseWithCapacityResponse(
            **HouseResponse.model_validate(item.house).model_dump(),
            member_count=item.member_count,
            capacity_remaining=item.capacity_remaining,
        )
        for item in house_occupancy(houses, members, policy)
    ]


@router.get("/by-number/{house_number}", response_model=HouseResponse)
async def get_house_by_number(house_number: str, db: Session = Depends(get_db)):
    house = HouseRepository(db).find_by_number(house_number)
    if not house:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Дом с номером {house_number} не найден"
        )
    return house


@router.get("/{house_id}", response_model=HouseResponse)
async def get_house(house_id: int, db: Session = Depends(get_db)):
    return _get_house_or_404(HouseRepository(db), house_id)


@router.post("", response_model=HouseResponse, status_code=status.HTTP_201_CREATED)
async def create_house(house: HouseCreate, db: Session = Depends(get_db)):
    """Создать дом. Номер дома должен быть уникальным."""
    repo = HouseRepository(db)
    _ensure_number_free(repo, house.house_number)
    created = repo.create(**house.model_dump())
    logger.info(f"Создан дом {created.house_number} (id={created.id})")
    return created


@router.patch("/{house_id}", response_model=HouseResponse)
async def update_house(house_id: int, house: HouseUpdate, db: Session = Depends(get_db)):
    repo = HouseRepository(db)
    existing = _get_house_or_404(repo, house_id)
    fields = house.model_dump(exclude_unset=True)
    if fields.get("house_number") and fields["house_number"] != existing.house_number:
        _ensure_number_free(repo, fields["house_number"])
    return repo.update(existing, fields)


@router.delete("/{house_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_house(house_id: int, db: Session = Depends(get_db)):
    """
    Удалить дом.

    Участники дома не удаляются; если хранилище запрещает удаление
    дома с участниками, возвращается 409.
    """
    repo = HouseRepository(db)
    house = _get_house_or_404(repo, house_id)
    try:
        repo.delete(house)
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Не удалось удалить дом {house_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Нельзя удалить дом, в котором есть участники"
        )
    logger.info(f"Удалён дом {house_id}")
    return None
