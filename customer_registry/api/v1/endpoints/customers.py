# customer_registry/api/v1/endpoints/customers.py
from typing import Any, List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from customer_registry import schemas
from customer_registry.api import deps
from customer_registry.core.logging import logger
from customer_registry.storage import CustomerStorage

router = APIRouter()


@router.get("", response_model=List[schemas.Customer])
def read_customers(storage: CustomerStorage = Depends(deps.get_storage)) -> Any:
    """
    Lista todos os clientes, ordenados por nome.
    """
    try:
        return storage.list_customers()
    except Exception as e:
        logger.error(f"Erro ao listar clientes: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch customers",
        )


@router.get("/search/{query}", response_model=schemas.CustomerWithDetails)
def search_customer(query: str, storage: CustomerStorage = Depends(deps.get_storage)) -> Any:
    """
    Busca um cliente pelo telefone (espaços são ignorados) ou, se não achar,
    pelo ID numérico.
    """
    try:
        customer = storage.get_customer_by_phone(query)
        if customer:
            details = storage.get_customer_with_details(customer.id)
            if details:
                return details

        if query.strip().isdigit():
            details = storage.get_customer_with_details(int(query))
            if details:
                return details
    except Exception as e:
        logger.error(f"Erro ao buscar cliente '{query}': {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to search for customer",
        )

    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")


@router.get("/{customer_id}", response_model=schemas.CustomerWithDetails)
def read_customer(customer_id: int, storage: CustomerStorage = Depends(deps.get_storage)) -> Any:
    """
    Recupera um cliente com seus telefones e serviços.
    """
    try:
        customer = storage.get_customer_with_details(customer_id)
    except Exception as e:
        logger.error(f"Erro ao obter cliente {customer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch customer",
        )
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    return customer


@router.post("", response_model=schemas.Customer, status_code=status.HTTP_201_CREATED)
def create_customer(
    customer_in: schemas.CustomerCreate,
    storage: CustomerStorage = Depends(deps.get_storage),
) -> Any:
    """
    Cria um novo cliente.
    """
    try:
        customer = storage.create_customer(customer_in)
    except Exception as e:
        logger.error(f"Erro ao criar cliente: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create customer",
        )
    logger.info(f"Cliente {customer.id} criado")
    return customer


@router.patch("/{customer_id}", response_model=schemas.Customer)
def update_customer(
    customer_id: int,
    customer_in: schemas.CustomerUpdate,
    storage: CustomerStorage = Depends(deps.get_storage),
) -> Any:
    """
    Atualiza apenas os campos enviados.
    """
    try:
        customer = storage.update_customer(customer_id, customer_in)
    except Exception as e:
        logger.error(f"Erro ao atualizar cliente {customer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update customer",
        )
    if not customer:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    logger.info(f"Cliente {customer_id} atualizado")
    return customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_customer(customer_id: int, storage: CustomerStorage = Depends(deps.get_storage)) -> Response:
    """
    Deleta um cliente junto com seus telefones e serviços.
    """
    try:
        deleted = storage.delete_customer(customer_id)
    except Exception as e:
        logger.error(f"Erro ao deletar cliente {customer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete customer",
        )
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    logger.info(f"Cliente {customer_id} deletado")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{customer_id}/phones", response_model=List[schemas.PhoneNumber])
def read_customer_phones(customer_id: int, storage: CustomerStorage = Depends(deps.get_storage)) -> Any:
    try:
        return storage.get_phone_numbers(customer_id)
    except Exception as e:
        logger.error(f"Erro ao listar telefones do cliente {customer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch phone numbers",
        )


@router.get("/{customer_id}/services", response_model=List[schemas.Service])
def read_customer_services(customer_id: int, storage: CustomerStorage = Depends(deps.get_storage)) -> Any:
    try:
        return storage.get_services(customer_id)
    except Exception as e:
        logger.error(f"Erro ao listar serviços do cliente {customer_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch services",
        )
