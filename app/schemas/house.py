"""Pydantic схемы для домов."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator
from app.utils.dates import as_utc

HouseStatus = Literal["active", "expired", "moved", "cancelled"]


class HouseBase(BaseModel):
    """Базовая схема дома."""
    house_number: str = Field(..., min_length=1, max_length=100, description="Номер дома (групповой код)")
    admin_email: Optional[str] = Field(None, max_length=320, description="Email администратора")
    registration_date: Optional[datetime] = Field(None, description="Дата регистрации")
    status: HouseStatus = Field("active", description="Статус дома")
    note: Optional[str] = Field(None, description="Примечание")

    @field_validator("registration_date", mode="before")
    @classmethod
    def empty_date_to_none(cls, value):
        return value or None

    @field_validator("registration_date")
    @classmethod
    def date_to_utc(cls, value):
        return as_utc(value)


class HouseCreate(HouseBase):
    """Схема для создания дома."""
    pass


class HouseUpdate(BaseModel):
    """Схема для частичного обновления дома."""
    house_number: Optional[str] = Field(None, min_length=1, max_length=100)
    admin_email: Optional[str] = Field(None, max_length=320)
    registration_date: Optional[datetime] = None
    status: Optional[HouseStatus] = None
    note: Optional[str] = None

    @field_validator("house_number", "status")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} не может быть null")
        return value

    @field_validator("registration_date", mode="before")
    @classmethod
    def empty_date_to_none(cls, value):
        return value or None

    @field_validator("registration_date")
    @classmethod
    def date_to_utc(cls, value):
        return as_utc(value)


class HouseResponse(HouseBase):
    """Схема ответа с данными дома."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class HouseWithCapacityResponse(HouseResponse):
    """Дом с количеством участников и свободных мест."""
    member_count: int
    capacity_remaining: int
