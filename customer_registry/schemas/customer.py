# customer_registry/schemas/customer.py
from typing import List, Optional

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel, PartialUpdate, reject_null
from .phone_number import PhoneNumber
from .service import Service


class CustomerBase(CamelModel):
    name: str = Field(..., min_length=1, examples=["Ahmed Al-Harbi"])
    responsible: Optional[str] = Field(None, examples=["Sara"])


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(PartialUpdate):
    name: Optional[str] = Field(None, min_length=1)
    responsible: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        return reject_null(value, "name")


class Customer(CustomerBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class CustomerWithDetails(Customer):
    phone_numbers: List[PhoneNumber] = []
    services: List[Service] = []
