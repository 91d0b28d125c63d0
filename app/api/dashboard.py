"""API роут сводной панели."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.config import get_settings
from app.database import get_db
from app.repositories.house import HouseRepository
from app.repositories.info_log import InfoLogRepository
from app.repositories.member import MemberRepository
from app.schemas.dashboard import DashboardResponse, DashboardStats
from app.schemas.house import HouseResponse
from app.schemas.info_log import InfoLogResponse
from app.services.auth import get_current_user

router = APIRouter(prefix="/dashboard", tags=["dashboard"], dependencies=[Depends(get_current_user)])


@router.get("", response_model=DashboardResponse)
async def get_dashboard(db: Session = Depends(get_db)):
    """Сводка: количество заявок, домов, участников и истёкших домов."""
    settings = get_settings()
    logs = InfoLogRepository(db)
    houses = HouseRepository(db)
    expired_houses = houses.list_by_status("expired")

    return DashboardResponse(
        stats=DashboardStats(
            info_log_count=logs.count(),
            house_count=len(houses.list_all()),
            member_count=len(MemberRepository(db).list_all()),
            expired_house_count=len(expired_houses),
        ),
        recent_info_logs=[
            InfoLogResponse.model_validate(log) for log in logs.list_recent(settings.RECENT_INFO_LOGS_LIMIT)
        ],
        expired_houses=[HouseResponse.model_validate(house) for house in expired_houses],
    )
