"""Pydantic схемы для авторизации."""
from pydantic import BaseModel, Field


class Token(BaseModel):
    """Схема токена."""
    access_token: str
    token_type: str = "bearer"


class UserLogin(BaseModel):
    """Схема входа пользователя."""
    username: str
    password: str


class UserCreate(BaseModel):
    """Схема регистрации пользователя."""
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6, max_length=72)


class UserResponse(BaseModel):
    """Схема ответа с данными пользователя."""
    id: int
    username: str
    is_active: bool

    class Config:
        from_attributes = True


class LogoutResponse(BaseModel):
    success: bool = True
