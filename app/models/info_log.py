"""Модель входящей заявки (InfoLog)."""
from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, Index
from sqlalchemy.sql import func
from app.database import Base


class InfoLog(Base):
    """Модель сырой заявки на подключение."""

    __tablename__ = "info_logs"

    id = Column(Integer, primary_key=True, index=True)
    line_id = Column(String(100), nullable=True)
    phone_number = Column(String(50), nullable=True)
    registration_date = Column(DateTime(timezone=True), nullable=True)
    expiration_date = Column(DateTime(timezone=True), nullable=True)
    package = Column(String(100), nullable=True)
    package_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    email = Column(String(320), nullable=True)
    # Мягкая ссылка на House.house_number (без внешнего ключа)
    house_group = Column(String(100), nullable=True)
    customer_name = Column(String(200), nullable=True)
    channel = Column(String(20), nullable=True, comment="line/facebook/walk-in/other")
    cancelled_or_moved = Column(String(20), nullable=True)
    sync_status = Column(String(20), nullable=False, default="pending", comment="ok/error/pending")
    sync_note = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_info_log_house_group', 'house_group'),
    )

    def __repr__(self):
        return f"<InfoLog(id={self.id}, customer_name='{self.customer_name}', house_group='{self.house_group}')>"
