"""Скрипт для инициализации тестовых данных."""
import sys
from datetime import timedelta
from pathlib import Path

# Добавляем корневую директорию в путь
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app.config import get_settings
from app.database import Database
from app.repositories.house import HouseRepository
from app.repositories.info_log import InfoLogRepository
from app.services.provisioner import MemberProvisioner
from app.utils.dates import utcnow


def init_test_data():
    """Инициализировать тестовые данные."""
    settings = get_settings()
    database = Database(settings.DATABASE_URL)
    database.init()
    database.create_all()
    db = database.session()
    try:
        houses = HouseRepository(db)
        created_houses = 0
        for house_number in ["A101", "A102", "B201", "B202", "C301"]:
            if not houses.find_by_number(house_number):
                houses.create(house_number=house_number, admin_email=f"admin-{house_number.lower()}@example.com")
                created_houses += 1
        print(f"Создано домов: {created_houses}")

        now = utcnow()
        logs = InfoLogRepository(db)
        samples = [
            dict(line_id="U100", customer_name="Somchai", email="somchai@example.com", house_group="A101",
                 channel="line", package="1 month", package_price=150.0, expiration_date=now + timedelta(days=30)),
            dict(line_id="U101", customer_name="Malee", email="malee@example.com", house_group="A101",
                 channel="facebook", package="3 months", package_price=400.0, expiration_date=now - timedelta(days=3)),
            dict(line_id="U102", customer_name="Niran", email="niran@example.com", channel="walk-in"),
        ]
        provisioner = MemberProvisioner.from_session(db)
        for sample in samples:
            log = logs.create(**sample)
            if log.house_group:
                result = provisioner.provision(log)
                print(f"Заявка {log.id} ({log.customer_name}): {result.outcome.value}")

        print("Инициализация тестовых данных завершена")

    except Exception as e:
        print(f"Ошибка при инициализации данных: {e}")
        db.rollback()
    finally:
        db.close()
        database.close()


if __name__ == "__main__":
    init_test_data()
