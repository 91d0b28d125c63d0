"""Репозиторий домов."""
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.house import House


class HouseRepository:
    """Доступ к таблице домов."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, house_id: int) -> Optional[House]:
        return self.db.query(House).filter(House.id == house_id).first()

    def find_by_number(self, house_number: str) -> Optional[House]:
        """Найти дом по точному совпадению номера."""
        return self.db.query(House).filter(House.house_number == house_number).first()

    def list_all(self) -> List[House]:
        return self.db.query(House).order_by(House.id).all()

    def list_by_status(self, status: str) -> List[House]:
        return self.db.query(House).filter(House.status == status).order_by(House.id).all()

    def create(self, **fields) -> House:
        house = House(**fields)
        self.db.add(house)
        self.db.commit()
        self.db.refresh(house)
        return house

    def update(self, house: House, fields: dict) -> House:
        for name, value in fields.items():
            setattr(house, name, value)
        self.db.commit()
        self.db.refresh(house)
        return house

    def delete(self, house: House) -> None:
        self.db.delete(house)
        self.db.commit()
