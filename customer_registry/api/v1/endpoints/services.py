# customer_registry/api/v1/endpoints/services.py
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Response, status

from customer_registry import schemas
from customer_registry.api import deps
from customer_registry.core.exceptions import CustomerNotFoundError
from customer_registry.core.logging import logger
from customer_registry.storage import CustomerStorage

router = APIRouter()


@router.post("", response_model=schemas.Service, status_code=status.HTTP_201_CREATED)
def create_service(
    service_in: schemas.ServiceCreate,
    storage: CustomerStorage = Depends(deps.get_storage),
) -> Any:
    try:
        service = storage.create_service(service_in)
    except CustomerNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    except Exception as e:
        logger.error(f"Erro ao criar serviço: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create service",
        )
    logger.info(f"Serviço {service.id} ({service.code}) criado para o cliente {service.customer_id}")
    return service


@router.patch("/{service_id}", response_model=schemas.Service)
def update_service(
    service_id: int,
    service_in: schemas.ServiceUpdate,
    storage: CustomerStorage = Depends(deps.get_storage),
) -> Any:
    try:
        service = storage.update_service(service_id, service_in)
    except Exception as e:
        logger.error(f"Erro ao atualizar serviço {service_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update service",
        )
    if not service:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return service


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_service(service_id: int, storage: CustomerStorage = Depends(deps.get_storage)) -> Response:
    try:
        deleted = storage.delete_service(service_id)
    except Exception as e:
        logger.error(f"Erro ao deletar serviço {service_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete service",
        )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
