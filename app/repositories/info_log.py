"""Репозиторий заявок InfoLog."""
from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.info_log import InfoLog


class InfoLogRepository:
    """Доступ к таблице заявок."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, log_id: int) -> Optional[InfoLog]:
        return self.db.query(InfoLog).filter(InfoLog.id == log_id).first()

    def list_all(self) -> List[InfoLog]:
        """Все заявки, новые первыми."""
        return self.db.query(InfoLog).order_by(InfoLog.created_at.desc(), InfoLog.id.desc()).all()

    def list_recent(self, limit: int) -> List[InfoLog]:
        return (
            self.db.query(InfoLog)
            .order_by(InfoLog.created_at.desc(), InfoLog.id.desc())
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(InfoLog).count()

    def create(self, **fields) -> InfoLog:
        log = InfoLog(**fields)
        self.db.add(log)
        self.db.commit()
        self.db.refresh(log)
        return log

    def update(self, log_id: int, fields: dict) -> Optional[InfoLog]:
        """Обновить поля заявки. Возвращает None, если заявка не найдена."""
        log = self.find_by_id(log_id)
        if log is None:
            return None
        for name, value in fields.items():
            setattr(log, name, value)
        self.db.commit()
        return log

    def delete(self, log: InfoLog) -> None:
        self.db.delete(log)
        self.db.commit()
