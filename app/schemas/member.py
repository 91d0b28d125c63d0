"""Pydantic схемы для участников."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, computed_field, field_validator
from app.services.status import days_expired, is_effectively_active
from app.utils.dates import as_utc


class MemberFields(BaseModel):
    """Редактируемые поля участника."""
    line_id: Optional[str] = Field(None, max_length=100, description="Внешний идентификатор (LINE)")
    phone_number: Optional[str] = Field(None, max_length=50)
    customer_name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=320)
    registration_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = Field(None, description="Дата окончания, пусто - бессрочно")
    package: Optional[str] = Field(None, max_length=100)
    package_price: Optional[float] = Field(None, ge=0)
    channel: Optional[str] = Field(None, max_length=20)
    note: Optional[str] = None

    @field_validator("registration_date", "expiration_date", mode="before")
    @classmethod
    def empty_date_to_none(cls, value):
        return value or None

    @field_validator("registration_date", "expiration_date")
    @classmethod
    def date_to_utc(cls, value):
        return as_utc(value)


class MemberCreate(MemberFields):
    """Схема для ручного создания участника."""
    house_id: int = Field(..., description="ID дома")
    member_email: str = Field(..., max_length=320, description="Email участника")


class MemberUpdate(MemberFields):
    """Схема для частичного обновления участника."""
    house_id: Optional[int] = None
    member_email: Optional[str] = Field(None, max_length=320)

    @field_validator("house_id", "member_email")
    @classmethod
    def not_null(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} не может быть null")
        return value


class MemberResponse(MemberFields):
    """Схема ответа с данными участника."""
    id: int
    house_id: int
    house_number: Optional[str] = None
    member_email: str
    is_active: bool
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def is_effectively_active(self) -> bool:
        """Статус на текущий момент, вычисленный по expiration_date."""
        return is_effectively_active(self.expiration_date)

    class Config:
        from_attributes = True


class ExpiredMemberResponse(MemberResponse):
    """Истёкший участник с количеством дней после окончания."""

    @computed_field
    @property
    def days_expired(self) -> Optional[int]:
        return days_expired(self.expiration_date)
