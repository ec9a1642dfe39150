# customer_registry/storage/database.py
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from customer_registry import crud, schemas
from customer_registry.core.exceptions import CustomerNotFoundError, StoreError
from customer_registry.core.logging import logger
from customer_registry.database import session_scope

from .base import CustomerStorage

# Faixa da coluna INTEGER (32 bits no PostgreSQL); ids fora dela não existem
MIN_ID = -(2**31)
MAX_ID = 2**31 - 1


def id_in_range(id: int) -> bool:
    return MIN_ID <= id <= MAX_ID


def is_foreign_key_violation(error: IntegrityError) -> bool:
    # SQLite: "FOREIGN KEY constraint failed"; PostgreSQL: "violates foreign key constraint"
    return "FOREIGN KEY" in str(error.orig).upper()


class DatabaseStorage(CustomerStorage):
    """Relational store on SQLAlchemy.

    Every public method runs in its own transaction: either all of its
    steps are committed or none are.  ORM objects never leave this class;
    callers get detached pydantic records.  Ids that cannot exist in an
    INTEGER column are answered as not found without touching the database.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        try:
            with session_scope(self.session_factory) as db:
                yield db
        except StoreError:
            raise
        except SQLAlchemyError as e:
            logger.error(f"Erro no banco ao {action}: {str(e)}")
            raise StoreError(f"Failed to {action}") from e

    def _lock_customer(self, db: Session, customer_id: int):
        customer = crud.customer.get_for_update(db, id=customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return customer

    # Clientes
    def list_customers(self) -> List[schemas.Customer]:
        with self._transaction("list customers") as db:
            return [schemas.Customer.model_validate(c) for c in crud.customer.get_multi(db)]

    def get_customer(self, id: int) -> Optional[schemas.Customer]:
        if not id_in_range(id):
            return None
        with self._transaction("fetch customer") as db:
            customer = crud.customer.get(db, id=id)
            return schemas.Customer.model_validate(customer) if customer else None

    def get_customer_with_details(self, id: int) -> Optional[schemas.CustomerWithDetails]:
        if not id_in_range(id):
            return None
        with self._transaction("fetch customer") as db:
            customer = crud.customer.get(db, id=id)
            if customer is None:
                return None
            return schemas.CustomerWithDetails.model_validate(customer)

    def get_customer_by_phone(self, number: str) -> Optional[schemas.Customer]:
        with self._transaction("search customer by phone") as db:
            phone = crud.phone_number.get_by_normalized_number(db, number=number)
            if phone is None:
                return None
            return schemas.Customer.model_validate(phone.customer)

    def create_customer(self, obj_in: schemas.CustomerCreate) -> schemas.Customer:
        with self._transaction("create customer") as db:
            customer = crud.customer.create(db, obj_in=obj_in)
            return schemas.Customer.model_validate(customer)

    def update_customer(self, id: int, obj_in: schemas.CustomerUpdate) -> Optional[schemas.Customer]:
        if not id_in_range(id):
            return None
        with self._transaction("update customer") as db:
            customer = crud.customer.get(db, id=id)
            if customer is None:
                return None
            customer = crud.customer.update(db, db_obj=customer, obj_in=obj_in)
            return schemas.Customer.model_validate(customer)

    def delete_customer(self, id: int) -> bool:
        if not id_in_range(id):
            return False
        with self._transaction("delete customer") as db:
            removed = crud.customer.remove(db, id=id)
            return removed is not None

    # Telefones
    def get_phone_numbers(self, customer_id: int) -> List[schemas.PhoneNumber]:
        if not id_in_range(customer_id):
            return []
        with self._transaction("fetch phone numbers") as db:
            phones = crud.phone_number.get_multi_by_customer(db, customer_id=customer_id)
            return [schemas.PhoneNumber.model_validate(p) for p in phones]

    def create_phone_number(self, obj_in: schemas.PhoneNumberCreate) -> schemas.PhoneNumber:
        if not id_in_range(obj_in.customer_id):
            raise CustomerNotFoundError(obj_in.customer_id)
        with self._transaction("create phone number") as db:
            self._lock_customer(db, obj_in.customer_id)
            if obj_in.is_primary:
                crud.phone_number.demote_primaries(db, customer_id=obj_in.customer_id)
            try:
                phone = crud.phone_number.create(db, obj_in=obj_in)
            except IntegrityError as e:
                # Cliente apagado entre a trava e o insert (o SQLite ignora FOR UPDATE)
                if is_foreign_key_violation(e):
                    raise CustomerNotFoundError(obj_in.customer_id) from e
                raise
            return schemas.PhoneNumber.model_validate(phone)

    def update_phone_number(
        self, id: int, obj_in: schemas.PhoneNumberUpdate
    ) -> Optional[schemas.PhoneNumber]:
        if not id_in_range(id):
            return None
        with self._transaction("update phone number") as db:
            phone = crud.phone_number.get(db, id=id)
            if phone is None:
                return None
            changes = obj_in.changes()
            if changes.get("is_primary"):
                self._lock_customer(db, phone.customer_id)
                crud.phone_number.demote_primaries(db, customer_id=phone.customer_id, exclude_id=id)
            phone = crud.phone_number.update(db, db_obj=phone, obj_in=changes)
            return schemas.PhoneNumber.model_validate(phone)

    def delete_phone_number(self, id: int) -> bool:
        if not id_in_range(id):
            return False
        with self._transaction("delete phone number") as db:
            phone = crud.phone_number.get(db, id=id)
            if phone is None:
                return False
            customer_id = phone.customer_id
            self._lock_customer(db, customer_id)
            # Relê com o cliente travado: o flag pode ter mudado desde a primeira leitura
            phone = crud.phone_number.get_for_update(db, id=id)
            if phone is None:
                return False
            was_primary = phone.is_primary
            # Apaga antes de promover para nunca existirem dois principais
            crud.phone_number.remove(db, db_obj=phone)
            if was_primary:
                remaining = crud.phone_number.get_multi_by_customer(db, customer_id=customer_id)
                if remaining:
                    remaining[0].is_primary = True
                    db.flush()
                    logger.debug(f"Telefone {remaining[0].id} promovido a principal do cliente {customer_id}")
            return True

    # Serviços
    def get_services(self, customer_id: int) -> List[schemas.Service]:
        if not id_in_range(customer_id):
            return []
        with self._transaction("fetch services") as db:
            services = crud.service.get_multi_by_customer(db, customer_id=customer_id)
            return [schemas.Service.model_validate(s) for s in services]

    def create_service(self, obj_in: schemas.ServiceCreate) -> schemas.Service:
        if not id_in_range(obj_in.customer_id):
            raise CustomerNotFoundError(obj_in.customer_id)
        with self._transaction("create service") as db:
            if crud.customer.get(db, id=obj_in.customer_id) is None:
                raise CustomerNotFoundError(obj_in.customer_id)
            try:
                service = crud.service.create(db, obj_in=obj_in)
            except IntegrityError as e:
                # Cliente apagado entre a checagem e o insert
                if is_foreign_key_violation(e):
                    raise CustomerNotFoundError(obj_in.customer_id) from e
                raise
            return schemas.Service.model_validate(service)

    def update_service(self, id: int, obj_in: schemas.ServiceUpdate) -> Optional[schemas.Service]:
        if not id_in_range(id):
            return None
        with self._transaction("update service") as db:
            service = crud.service.get(db, id=id)
            if service is None:
                return None
            service = crud.service.update(db, db_obj=service, obj_in=obj_in)
            return schemas.Service.model_validate(service)

    def delete_service(self, id: int) -> bool:
        if not id_in_range(id):
            return False
        with self._transaction("delete service") as db:
            return crud.service.remove(db, id=id) is not None
