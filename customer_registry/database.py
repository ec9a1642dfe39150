# customer_registry/database.py
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from customer_registry.core.config import settings


def build_engine(database_url: str) -> Engine:
    """Cria o motor de banco de dados, ligando foreign keys no SQLite."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessões do SQLite são usadas a partir do threadpool do FastAPI
        connect_args["check_same_thread"] = False

    engine = create_engine(
        database_url,
        echo=settings.ENVIRONMENT == "development" and settings.LOG_LEVEL.upper() == "DEBUG",
        pool_pre_ping=True,
        connect_args=connect_args,
    )

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def build_sessionmaker(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        class_=Session,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )


engine = build_engine(settings.DATABASE_URL)
SessionLocal = build_sessionmaker(engine)


@contextmanager
def session_scope(factory: sessionmaker = SessionLocal) -> Iterator[Session]:
    """Abre uma sessão, faz commit no sucesso e rollback em qualquer erro."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
