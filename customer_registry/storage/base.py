"""
Storage contract shared by every backend.

A ``CustomerStorage`` owns customers, their phone numbers and their
services.  Besides plain CRUD it keeps two rules:

* a customer has at most one primary phone number at any time, and
* deleting a customer removes its phone numbers and services with it.

"Not found" is an ordinary answer (``None`` or ``False``).  A failure of
the backing store is raised as :class:`~customer_registry.core.exceptions.StoreError`
so callers can tell the two apart.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from customer_registry import schemas


class CustomerStorage(ABC):
    # Clientes
    @abstractmethod
    def list_customers(self) -> List[schemas.Customer]:
        """All customers ordered by name."""

    @abstractmethod
    def get_customer(self, id: int) -> Optional[schemas.Customer]:
        ...

    @abstractmethod
    def get_customer_with_details(self, id: int) -> Optional[schemas.CustomerWithDetails]:
        ...

    @abstractmethod
    def get_customer_by_phone(self, number: str) -> Optional[schemas.Customer]:
        """Owner of the first phone (lowest id) matching ``number`` with whitespace removed."""

    @abstractmethod
    def create_customer(self, obj_in: schemas.CustomerCreate) -> schemas.Customer:
        ...

    @abstractmethod
    def update_customer(self, id: int, obj_in: schemas.CustomerUpdate) -> Optional[schemas.Customer]:
        ...

    @abstractmethod
    def delete_customer(self, id: int) -> bool:
        """Delete the customer together with its phone numbers and services."""

    # Telefones
    @abstractmethod
    def get_phone_numbers(self, customer_id: int) -> List[schemas.PhoneNumber]:
        ...

    @abstractmethod
    def create_phone_number(self, obj_in: schemas.PhoneNumberCreate) -> schemas.PhoneNumber:
        """Insert a phone; a new primary demotes the customer's current primary first."""

    @abstractmethod
    def update_phone_number(
        self, id: int, obj_in: schemas.PhoneNumberUpdate
    ) -> Optional[schemas.PhoneNumber]:
        """Merge the update; setting ``is_primary`` demotes the customer's other phones first."""

    @abstractmethod
    def delete_phone_number(self, id: int) -> bool:
        """Delete a phone; if it was primary the first remaining phone is promoted."""

    # Serviços
    @abstractmethod
    def get_services(self, customer_id: int) -> List[schemas.Service]:
        ...

    @abstractmethod
    def create_service(self, obj_in: schemas.ServiceCreate) -> schemas.Service:
        ...

    @abstractmethod
    def update_service(self, id: int, obj_in: schemas.ServiceUpdate) -> Optional[schemas.Service]:
        ...

    @abstractmethod
    def delete_service(self, id: int) -> bool:
        ...

    def list_customers_with_details(self) -> List[schemas.CustomerWithDetails]:
        result = []
        for customer in self.list_customers():
            details = self.get_customer_with_details(customer.id)
            # Pode ter sido apagado entre as duas leituras
            if details is not None:
                result.append(details)
        return result
