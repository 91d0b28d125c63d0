"""Модель участника дома."""
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, Numeric, ForeignKey, Index
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class HouseMember(Base):
    """Модель участника (места) в доме."""

    __tablename__ = "house_members"

    id = Column(Integer, primary_key=True, index=True)
    # Удаление дома не каскадируется на участников
    house_id = Column(Integer, ForeignKey("houses.id"), nullable=False)
    member_email = Column(String(320), nullable=False, default="")
    line_id = Column(String(100), nullable=True, comment="Внешний идентификатор для проверки дубликатов")
    phone_number = Column(String(50), nullable=True)
    customer_name = Column(String(200), nullable=True)
    email = Column(String(320), nullable=True)
    registration_date = Column(DateTime(timezone=True), nullable=True)
    expiration_date = Column(DateTime(timezone=True), nullable=True, comment="NULL - бессрочно")
    package = Column(String(100), nullable=True)
    package_price = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    channel = Column(String(20), nullable=True)
    note = Column(Text, nullable=True)
    # Сохраняется при записи, на чтении статус пересчитывается по expiration_date
    is_active = Column(Boolean, nullable=False, default=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    house = relationship("House")

    __table_args__ = (
        Index('idx_member_house', 'house_id'),
        Index('idx_member_house_line', 'house_id', 'line_id'),
    )

    @property
    def house_number(self):
        return self.house.house_number if self.house is not None else None

    def __repr__(self):
        return f"<HouseMember(id={self.id}, house_id={self.house_id}, member_email='{self.member_email}')>"
