"""Репозиторий участников."""
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.member import HouseMember


class MemberRepository:
    """Доступ к таблице участников."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, member_id: int) -> Optional[HouseMember]:
        return self.db.query(HouseMember).filter(HouseMember.id == member_id).first()

    def list_all(self) -> List[HouseMember]:
        return self.db.query(HouseMember).order_by(HouseMember.id).all()

    def list_by_house(self, house_id: int) -> List[HouseMember]:
        return (
            self.db.query(HouseMember)
            .filter(HouseMember.house_id == house_id)
            .order_by(HouseMember.id)
            .all()
        )

    def insert(self, member: HouseMember) -> HouseMember:
        self.db.add(member)
        self.db.commit()
        self.db.refresh(member)
        return member

    def update(self, member: HouseMember, fields: dict) -> HouseMember:
        for name, value in fields.items():
            setattr(member, name, value)
        self.db.commit()
        self.db.refresh(member)
        return member

    def delete(self, member: HouseMember) -> None:
        self.db.delete(member)
        self.db.commit()
