"""Модели базы данных."""
from app.models.house import House
from app.models.member import HouseMember
from app.models.info_log import InfoLog
from app.models.user import User

__all__ = ["House", "HouseMember", "InfoLog", "User"]
