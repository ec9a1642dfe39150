# customer_registry/api/v1/endpoints/sheets.py
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from customer_registry import schemas
from customer_registry.api import deps
from customer_registry.core.logging import logger
from customer_registry.services.sheets_service import SheetsSyncService

router = APIRouter()


@router.get("/sync", response_model=schemas.SheetsSyncResult)
def sync_sheets(sheets: SheetsSyncService = Depends(deps.get_sheets_service)) -> Any:
    """
    Relê todos os clientes e envia a cópia para o Google Sheets, se configurado.
    """
    try:
        return sheets.sync()
    except Exception as e:
        logger.error(f"Erro ao sincronizar com o Google Sheets: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sync with Google Sheets",
        )
