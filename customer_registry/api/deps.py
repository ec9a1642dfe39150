# customer_registry/api/deps.py
from functools import lru_cache

from fastapi import Depends

from customer_registry.core.config import settings
from customer_registry.core.logging import logger
from customer_registry.services.sheets_service import SheetsSyncService
from customer_registry.storage import CustomerStorage, DatabaseStorage, MemoryStorage


@lru_cache()
def get_storage() -> CustomerStorage:
    """Storage configurado em ``STORAGE_BACKEND``; uma instância por processo."""
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        logger.info("Usando armazenamento em memória")
        return MemoryStorage()
    if backend == "database":
        from customer_registry.database import SessionLocal

        return DatabaseStorage(SessionLocal)
    raise ValueError(f"STORAGE_BACKEND desconhecido: {settings.STORAGE_BACKEND}")


def get_sheets_service(storage: CustomerStorage = Depends(get_storage)) -> SheetsSyncService:
    return SheetsSyncService.from_settings(storage)
