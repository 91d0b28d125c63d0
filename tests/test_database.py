"""Тесты жизненного цикла подключения к БД."""
import pytest

from app.database import Database


def test_session_before_init_raises():
    database = Database("sqlite://")
    with pytest.raises(RuntimeError):
        database.session()


def test_init_close_lifecycle():
    database = Database("sqlite://")
    database.init()
    assert database.is_initialized
    database.create_all()
    session = database.session()
    session.close()
    database.close()
    assert not database.is_initialized
    with pytest.raises(RuntimeError):
        database.create_all()
