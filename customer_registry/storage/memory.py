# customer_registry/storage/memory.py
import itertools
import threading
from typing import Dict, List, Optional

from customer_registry import schemas
from customer_registry.core.exceptions import CustomerNotFoundError
from customer_registry.core.logging import logger
from customer_registry.utils import normalize_phone

from .base import CustomerStorage


class MemoryStorage(CustomerStorage):
    """In-memory store for tests and demos.

    Each instance owns its own collections and id counters, so several
    isolated stores can live side by side.  Dicts keep insertion order,
    which is also ascending id order.  A single re-entrant lock makes every
    multi-step operation atomic for concurrent callers.
    """

    def __init__(self):
        self._customers: Dict[int, schemas.Customer] = {}
        self._phone_numbers: Dict[int, schemas.PhoneNumber] = {}
        self._services: Dict[int, schemas.Service] = {}
        self._customer_ids = itertools.count(1)
        self._phone_number_ids = itertools.count(1)
        self._service_ids = itertools.count(1)
        self._lock = threading.RLock()

    def _require_customer(self, customer_id: int) -> None:
        if customer_id not in self._customers:
            raise CustomerNotFoundError(customer_id)

    # Clientes
    def list_customers(self) -> List[schemas.Customer]:
        with self._lock:
            customers = sorted(self._customers.values(), key=lambda c: (c.name, c.id))
            return [c.model_copy() for c in customers]

    def get_customer(self, id: int) -> Optional[schemas.Customer]:
        with self._lock:
            customer = self._customers.get(id)
            return customer.model_copy() if customer else None

    def get_customer_with_details(self, id: int) -> Optional[schemas.CustomerWithDetails]:
        with self._lock:
            customer = self._customers.get(id)
            if customer is None:
                return None
            return schemas.CustomerWithDetails(
                **customer.model_dump(),
                phone_numbers=self.get_phone_numbers(id),
                services=self.get_services(id),
            )

    def get_customer_by_phone(self, number: str) -> Optional[schemas.Customer]:
        target = normalize_phone(number)
        with self._lock:
            for phone in self._phone_numbers.values():
                if normalize_phone(phone.number) == target:
                    return self.get_customer(phone.customer_id)
            return None

    def create_customer(self, obj_in: schemas.CustomerCreate) -> schemas.Customer:
        with self._lock:
            customer = schemas.Customer(id=next(self._customer_ids), **obj_in.model_dump())
            self._customers[customer.id] = customer
            return customer.model_copy()

    def update_customer(self, id: int, obj_in: schemas.CustomerUpdate) -> Optional[schemas.Customer]:
        with self._lock:
            customer = self._customers.get(id)
            if customer is None:
                return None
            updated = customer.model_copy(update=obj_in.changes())
            self._customers[id] = updated
            return updated.model_copy()

    def delete_customer(self, id: int) -> bool:
        with self._lock:
            if id not in self._customers:
                return False
            phone_ids = [p.id for p in self._phone_numbers.values() if p.customer_id == id]
            service_ids = [s.id for s in self._services.values() if s.customer_id == id]
            for phone_id in phone_ids:
                del self._phone_numbers[phone_id]
            for service_id in service_ids:
                del self._services[service_id]
            del self._customers[id]
            logger.debug(
                f"Cliente {id} apagado com {len(phone_ids)} telefone(s) e {len(service_ids)} serviço(s)"
            )
            return True

    # Telefones
    def get_phone_numbers(self, customer_id: int) -> List[schemas.PhoneNumber]:
        with self._lock:
            return [
                p.model_copy() for p in self._phone_numbers.values() if p.customer_id == customer_id
            ]

    def _demote_primaries(self, customer_id: int, exclude_id: Optional[int] = None) -> None:
        for phone_id, phone in self._phone_numbers.items():
            if phone.customer_id == customer_id and phone.is_primary and phone_id != exclude_id:
                self._phone_numbers[phone_id] = phone.model_copy(update={"is_primary": False})

    def create_phone_number(self, obj_in: schemas.PhoneNumberCreate) -> schemas.PhoneNumber:
        with self._lock:
            self._require_customer(obj_in.customer_id)
            if obj_in.is_primary:
                self._demote_primaries(obj_in.customer_id)
            phone = schemas.PhoneNumber(id=next(self._phone_number_ids), **obj_in.model_dump())
            self._phone_numbers[phone.id] = phone
            return phone.model_copy()

    def update_phone_number(
        self, id: int, obj_in: schemas.PhoneNumberUpdate
    ) -> Optional[schemas.PhoneNumber]:
        with self._lock:
            phone = self._phone_numbers.get(id)
            if phone is None:
                return None
            changes = obj_in.changes()
            changes.pop("customer_id", None)
            if changes.get("is_primary"):
                self._demote_primaries(phone.customer_id, exclude_id=id)
            updated = phone.model_copy(update=changes)
            self._phone_numbers[id] = updated
            return updated.model_copy()

    def delete_phone_number(self, id: int) -> bool:
        with self._lock:
            phone = self._phone_numbers.pop(id, None)
            if phone is None:
                return False
            if phone.is_primary:
                for other_id, other in self._phone_numbers.items():
                    if other.customer_id == phone.customer_id:
                        self._phone_numbers[other_id] = other.model_copy(update={"is_primary": True})
                        logger.debug(f"Telefone {other_id} promovido a principal do cliente {phone.customer_id}")
                        break
            return True

    # Serviços
    def get_services(self, customer_id: int) -> List[schemas.Service]:
        with self._lock:
            return [s.model_copy() for s in self._services.values() if s.customer_id == customer_id]

    def create_service(self, obj_in: schemas.ServiceCreate) -> schemas.Service:
        with self._lock:
            self._require_customer(obj_in.customer_id)
            service = schemas.Service(id=next(self._service_ids), **obj_in.model_dump())
            self._services[service.id] = service
            return service.model_copy()

    def update_service(self, id: int, obj_in: schemas.ServiceUpdate) -> Optional[schemas.Service]:
        with self._lock:
            service = self._services.get(id)
            if service is None:
                return None
            changes = obj_in.changes()
            changes.pop("customer_id", None)
            updated = service.model_copy(update=changes)
            self._services[id] = updated
            return updated.model_copy()

    def delete_service(self, id: int) -> bool:
        with self._lock:
            return self._services.pop(id, None) is not None
