"""API роуты для заявок InfoLog."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from app.api.deps import get_info_log_service
from app.database import get_db
from app.repositories.info_log import InfoLogRepository
from app.schemas.info_log import (
    InfoLogCreate,
    InfoLogUpdate,
    InfoLogResponse,
    InfoLogUpdateResponse,
    ProvisioningResponse,
)
from app.services.auth import get_current_user
from app.services.info_log import InfoLogService

router = APIRouter(prefix="/info-logs", tags=["info-logs"], dependencies=[Depends(get_current_user)])


def _get_log_or_404(repo: InfoLogRepository, log_id: int):
    log = repo.find_by_id(log_id)
    if not log:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Заявка с ID {log_id} не найдена"
        )
    return log


@router.get("", response_model=List[InfoLogResponse])
async def list_info_logs(db: Session = Depends(get_db)):
    """Получить все заявки (новые первыми)."""
    return InfoLogRepository(db).list_all()


@router.get("/{log_id}", response_model=InfoLogResponse)
async def get_info_log(log_id: int, db: Session = Depends(get_db)):
    return _get_log_or_404(InfoLogRepository(db), log_id)


@router.post("", response_model=InfoLogResponse, status_code=status.HTTP_201_CREATED)
async def create_info_log(info_log: InfoLogCreate, db: Session = Depends(get_db)):
    """Создать заявку. Участник при создании не создаётся."""
    return InfoLogRepository(db).create(**info_log.model_dump(exclude_none=True))


@router.patch("/{log_id}", response_model=InfoLogUpdateResponse)
async def update_info_log(
    log_id: int,
    info_log: InfoLogUpdate,
    service: InfoLogService = Depends(get_info_log_service),
):
    """
    Обновить заявку.

    Если передан непустой house_group, после сохранения автоматически
    создаётся участник дома. Итог создания возвращается в поле provisioning
    и не влияет на успешность обновления заявки.
    """
    result = service.on_info_log_updated(log_id, info_log.model_dump(exclude_unset=True))
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Заявка с ID {log_id} не найдена"
        )

    provisioning = None
    if result.provisioning is not None:
        provisioning = ProvisioningResponse(
            outcome=result.provisioning.outcome,
            member_id=result.provisioning.member_id,
            reason=result.provisioning.reason,
        )
    return InfoLogUpdateResponse(success=True, provisioning=provisioning)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_info_log(log_id: int, db: Session = Depends(get_db)):
    repo = InfoLogRepository(db)
    repo.delete(_get_log_or_404(repo, log_id))
    return None
