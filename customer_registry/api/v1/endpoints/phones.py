# customer_registry/api/v1/endpoints/phones.py
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from customer_registry import schemas
from customer_registry.api import deps
from customer_registry.core.exceptions import CustomerNotFoundError
from customer_registry.core.logging import logger
from customer_registry.storage import CustomerStorage

router = APIRouter()


@router.post("", response_model=schemas.PhoneNumber, status_code=status.HTTP_201_CREATED)
def create_phone_number(
    phone_in: schemas.PhoneNumberCreate,
    storage: CustomerStorage = Depends(deps.get_storage),
) -> Any:
    """
    Adiciona um telefone ao cliente. Um novo telefone principal tira a
    marca do principal anterior.
    """
    try:
        phone = storage.create_phone_number(phone_in)
    except CustomerNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    except Exception as e:
        logger.error(f"Erro ao criar telefone: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create phone number",
        )
    logger.info(f"Telefone {phone.id} criado para o cliente {phone.customer_id}")
    return phone


@router.patch("/{phone_id}", response_model=schemas.PhoneNumber)
def update_phone_number(
    phone_id: int,
    phone_in: schemas.PhoneNumberUpdate,
    storage: CustomerStorage = Depends(deps.get_storage),
) -> Any:
    try:
        phone = storage.update_phone_number(phone_id, phone_in)
    except Exception as e:
        logger.error(f"Erro ao atualizar telefone {phone_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update phone number",
        )
    if not phone:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phone number not found")
    return phone


@router.delete("/{phone_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_phone_number(phone_id: int, storage: CustomerStorage = Depends(deps.get_storage)) -> Response:
    """
    Remove um telefone. Se era o principal, outro telefone do cliente é promovido.
    """
    try:
        deleted = storage.delete_phone_number(phone_id)
    except Exception as e:
        logger.error(f"Erro ao deletar telefone {phone_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete phone number",
        )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Phone number not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
