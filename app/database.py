"""Подключение к базе данных."""
import logging
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Клиент хранилища с явным жизненным циклом.

    Создаётся один раз при старте приложения, инициализируется через init()
    и закрывается через close(). Сессии выдаются через session().
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_initialized(self) -> bool:
        return self.engine is not None

    def init(self) -> None:
        """Создать engine и фабрику сессий."""
        if self.engine is not None:
            return

        kwargs = {"echo": self.echo}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            # In-memory база живёт только в одном соединении
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_pre_ping"] = True

        self.engine = create_engine(self.url, **kwargs)
        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info(f"Подключение к БД инициализировано: {self.engine.url.render_as_string(hide_password=True)}")

    def create_all(self) -> None:
        """Создать таблицы (если ещё не созданы)."""
        # Импортируем модели, чтобы они зарегистрировались в metadata
        import app.models  # noqa: F401

        Base.metadata.create_all(bind=self._require_engine())

    def session(self) -> Session:
        """Открыть новую сессию."""
        self._require_engine()
        return self._session_factory()

    def close(self) -> None:
        """Закрыть все соединения."""
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self._session_factory = None
            logger.info("Подключение к БД закрыто")

    def _require_engine(self) -> Engine:
        if self.engine is None:
            raise RuntimeError("База данных не инициализирована, вызовите init()")
        return self.engine


def get_db(request: Request) -> Iterator[Session]:
    """Dependency для получения сессии БД."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
