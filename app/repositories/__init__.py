"""Репозитории для работы с хранилищем."""
from app.repositories.house import HouseRepository
from app.repositories.member import MemberRepository
from app.repositories.info_log import InfoLogRepository

__all__ = ["HouseRepository", "MemberRepository", "InfoLogRepository"]
