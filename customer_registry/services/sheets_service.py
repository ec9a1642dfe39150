# customer_registry/services/sheets_service.py
from typing import List, Optional

import httpx

from customer_registry import schemas
from customer_registry.core.config import settings
from customer_registry.core.exceptions import SheetsSyncError
from customer_registry.core.logging import logger
from customer_registry.storage import CustomerStorage


class SheetsSyncService:
    """One-way mirror of the customer list into Google Sheets.

    The store is always the source of truth: ``sync`` re-reads every
    customer with its phones and services and, when an Apps Script web app
    URL is configured, posts the whole snapshot to it.  Nothing is ever read
    back from the sheet.
    """

    def __init__(
        self,
        storage: CustomerStorage,
        apps_script_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.storage = storage
        self.apps_script_url = apps_script_url
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, storage: CustomerStorage) -> "SheetsSyncService":
        return cls(
            storage,
            apps_script_url=settings.GOOGLE_APPS_SCRIPT_URL,
            timeout=settings.SHEETS_TIMEOUT_SECONDS,
        )

    def snapshot(self) -> List[schemas.CustomerWithDetails]:
        return self.storage.list_customers_with_details()

    def push(self, customers: List[schemas.CustomerWithDetails]) -> None:
        payload = {
            "action": "syncCustomers",
            "customers": [c.model_dump(mode="json", by_alias=True) for c in customers],
        }
        try:
            # Apps Script responde com redirect para o conteúdo gerado
            with httpx.Client(
                timeout=self.timeout, follow_redirects=True, transport=self.transport
            ) as client:
                response = client.post(self.apps_script_url, json=payload)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Falha ao enviar clientes para o Google Sheets: {str(e)}")
            raise SheetsSyncError("Failed to sync with Google Sheets") from e

        logger.info(f"{len(customers)} cliente(s) enviados para o Google Sheets")

    def sync(self) -> schemas.SheetsSyncResult:
        customers = self.snapshot()
        if self.apps_script_url:
            self.push(customers)
        return schemas.SheetsSyncResult(synced=True, data=customers)
