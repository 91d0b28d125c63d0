"""Pydantic схемы для сводной панели."""
from typing import List
from pydantic import BaseModel
from app.schemas.house import HouseResponse
from app.schemas.info_log import InfoLogResponse


class DashboardStats(BaseModel):
    info_log_count: int
    house_count: int
    member_count: int
    expired_house_count: int


class DashboardResponse(BaseModel):
    """Сводка для главной страницы."""
    stats: DashboardStats
    recent_info_logs: List[InfoLogResponse]
    expired_houses: List[HouseResponse]
