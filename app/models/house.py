"""Модель дома (группы участников)."""
from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func
from app.database import Base


class House(Base):
    """Модель дома."""

    __tablename__ = "houses"

    id = Column(Integer, primary_key=True, index=True)
    # Бизнес-ключ дома, с ним сопоставляется house_group из InfoLog
    house_number = Column(String(100), nullable=False, unique=True, index=True)
    admin_email = Column(String(320), nullable=True)
    registration_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), nullable=False, default="active", comment="active/expired/moved/cancelled")
    note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_house_status', 'status'),
    )

    def __repr__(self):
        return f"<House(id={self.id}, house_number='{self.house_number}', status='{self.status}')>"
