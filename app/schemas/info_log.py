"""Pydantic схемы для заявок InfoLog."""
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator
from app.services.provisioner import ProvisionOutcome
from app.utils.dates import as_utc

Channel = Literal["line", "facebook", "walk-in", "other"]
CancelledOrMoved = Literal["cancelled", "moved", ""]
SyncStatus = Literal["ok", "error", "pending"]


class InfoLogBase(BaseModel):
    """Базовая схема заявки."""
    line_id: Optional[str] = Field(None, max_length=100, description="Внешний идентификатор (LINE)")
    phone_number: Optional[str] = Field(None, max_length=50)
    registration_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    package: Optional[str] = Field(None, max_length=100)
    package_price: Optional[float] = Field(None, ge=0)
    email: Optional[str] = Field(None, max_length=320)
    house_group: Optional[str] = Field(None, max_length=100, description="Номер дома для привязки")
    customer_name: Optional[str] = Field(None, max_length=200)
    channel: Optional[Channel] = None
    cancelled_or_moved: Optional[CancelledOrMoved] = None
    sync_status: Optional[SyncStatus] = None

    @field_validator("registration_date", "expiration_date", mode="before")
    @classmethod
    def empty_date_to_none(cls, value):
        # Пустая строка из формы означает отсутствие даты
        return value or None

    @field_validator("registration_date", "expiration_date")
    @classmethod
    def date_to_utc(cls, value):
        # SQLite хранит DateTime без смещения, поэтому сохраняем в UTC
        return as_utc(value)


class InfoLogCreate(InfoLogBase):
    """Схема для создания заявки."""
    sync_note: Optional[str] = None


class InfoLogUpdate(InfoLogBase):
    """Схема для обновления заявки (передаются только изменённые поля)."""

    @field_validator("sync_status")
    @classmethod
    def sync_status_not_null(cls, value):
        if value is None:
            raise ValueError("sync_status не может быть null")
        return value


class InfoLogResponse(InfoLogBase):
    """Схема ответа с данными заявки."""
    id: int
    sync_status: str
    sync_note: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProvisioningResponse(BaseModel):
    """Итог автоматического создания участника."""
    outcome: ProvisionOutcome
    member_id: Optional[int] = None
    reason: Optional[str] = None


class InfoLogUpdateResponse(BaseModel):
    """Ответ на обновление заявки."""
    success: bool = True
    provisioning: Optional[ProvisioningResponse] = None
