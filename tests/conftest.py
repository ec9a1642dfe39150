import os

# Precisa vir antes de importar o pacote: Settings lê o ambiente no import
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient

from customer_registry.api import deps
from customer_registry.database import build_engine, build_sessionmaker
from customer_registry.db import models  # noqa: F401
from customer_registry.db.base_class import Base
from customer_registry.main import create_app
from customer_registry.storage import DatabaseStorage, MemoryStorage


@pytest.fixture()
def memory_storage():
    return MemoryStorage()


@pytest.fixture()
def database_storage(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    yield DatabaseStorage(build_sessionmaker(engine))
    engine.dispose()


@pytest.fixture(params=["memory", "database"])
def storage(request):
    return request.getfixturevalue(f"{request.param}_storage")


@pytest.fixture()
def app(storage):
    application = create_app()
    application.dependency_overrides[deps.get_storage] = lambda: storage
    return application


@pytest.fixture()
def client(app):
    return TestClient(app)
