"""Главный файл приложения FastAPI."""
from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.database import Database
from app.api import auth, dashboard, houses, info_logs, members

settings = get_settings()

# Настройка логирования
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения."""
    # Startup
    logger.info("Запуск приложения")

    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    database.init()
    database.create_all()
    logger.info("Таблицы БД проверены/созданы")
    app.state.database = database

    yield

    # Shutdown
    logger.info("Остановка приложения")
    database.close()


# Создаем приложение FastAPI
app = FastAPI(
    title="House Member Service",
    description="Панель администрирования домов, участников и входящих заявок",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # В продакшене указать конкретные домены
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Подключаем роуты
app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
app.include_router(info_logs.router, prefix=settings.API_V1_PREFIX)
app.include_router(houses.router, prefix=settings.API_V1_PREFIX)
app.include_router(members.router, prefix=settings.API_V1_PREFIX)
app.include_router(dashboard.router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """Корневой endpoint."""
    return {
        "message": "House Member Service API",
        "version": "1.0.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
