"""Pydantic схемы для валидации."""
from app.schemas.house import HouseCreate, HouseUpdate, HouseResponse, HouseWithCapacityResponse
from app.schemas.member import MemberCreate, MemberUpdate, MemberResponse, ExpiredMemberResponse
from app.schemas.info_log import (
    InfoLogCreate,
    InfoLogUpdate,
    InfoLogResponse,
    InfoLogUpdateResponse,
    ProvisioningResponse,
)
from app.schemas.dashboard import DashboardStats, DashboardResponse
from app.schemas.auth import Token, UserLogin, UserCreate, UserResponse, LogoutResponse

__all__ = [
    "HouseCreate",
    "HouseUpdate",
    "HouseResponse",
    "HouseWithCapacityResponse",
    "MemberCreate",
    "MemberUpdate",
    "MemberResponse",
    "ExpiredMemberResponse",
    "InfoLogCreate",
    "InfoLogUpdate",
    "InfoLogResponse",
    "InfoLogUpdateResponse",
    "ProvisioningResponse",
    "DashboardStats",
    "DashboardResponse",
    "Token",
    "UserLogin",
    "UserCreate",
    "UserResponse",
    "LogoutResponse",
]
