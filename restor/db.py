import logging
import os

from sqlalchemy import create_engine, func, inspect, select
from sqlalchemy.orm import sessionmaker

from restor.config import LOG_LEVEL
from restor.models import Base, Dish, Restaurant

logger = logging.getLogger(__name__)

DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = int(os.getenv("DB_PORT", 5432))
DB_NAME = os.getenv("DB_NAME", "restor1_db")
DB_USER = os.getenv("DB_USER", "restor")
DB_PASSWORD = os.getenv("DB_PASSWORD", "")

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

engine = None
SessionLocal = None


def get_engine(url: str = DATABASE_URL):
    global engine
    if engine is None:
        engine = create_engine(
            url,
            echo=LOG_LEVEL == "DEBUG",
            pool_size=10,
            pool_pre_ping=True,
        )
    return engine


def get_sessionmaker():
    global SessionLocal
    if SessionLocal is None:
        SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine(),
        )
    return SessionLocal


def init_db(bind=None):
    bind = bind or get_engine()
    Base.metadata.create_all(bind=bind)


def check_connection(bind=None) -> dict:
    """Report table and row counts; raises if the database is unreachable."""
    bind = bind or get_engine()
    with bind.connect() as conn:
        tables = inspect(conn).get_table_names()
        restaurants = conn.execute(select(func.count()).select_from(Restaurant.__table__)).scalar_one()
        dishes = conn.execute(select(func.count()).select_from(Dish.__table__)).scalar_one()
    report = {"tables": len(tables), "restaurants": restaurants, "dishes": dishes}
    logger.info(
        "Database reachable: %d tables, %d restaurants, %d dishes",
        report["tables"], report["restaurants"], report["dishes"],
    )
    return report
