"""Фикстуры для тестов."""
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.database import Database
from app.main import app
from app.models.user import User
from app.repositories.house import HouseRepository
from app.repositories.info_log import InfoLogRepository
from app.repositories.member import MemberRepository
from app.services.auth import get_current_user

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def database() -> Database:
    """In-memory SQLite с созданными таблицами."""
    database = Database("sqlite://")
    database.init()
    database.create_all()
    yield database
    database.close()


@pytest.fixture
def db(database: Database) -> Session:
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def houses(db: Session) -> HouseRepository:
    return HouseRepository(db)


@pytest.fixture
def members(db: Session) -> MemberRepository:
    return MemberRepository(db)


@pytest.fixture
def logs(db: Session) -> InfoLogRepository:
    return InfoLogRepository(db)


@pytest.fixture
def house_a101(houses: HouseRepository):
    return houses.create(house_number="A101", admin_email="admin@example.com")


@pytest.fixture
def client(database: Database) -> TestClient:
    """Клиент API с подменённым текущим пользователем."""
    app.state.database = database
    app.dependency_overrides[get_current_user] = lambda: User(id=1, username="admin", is_active=True)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def anonymous_client(database: Database) -> TestClient:
    """Клиент API без подмены авторизации."""
    app.state.database = database
    app.dependency_overrides.clear()
    return TestClient(app)
