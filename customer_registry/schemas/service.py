# customer_registry/schemas/service.py
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from .base import CamelModel, PartialUpdate, reject_null


class ServiceBase(CamelModel):
    name: str = Field(..., min_length=1, examples=["Internet"])
    code: str = Field(..., min_length=1, examples=["INT-001"])
    notes: Optional[str] = None


class ServiceCreate(ServiceBase):
    customer_id: int


class ServiceUpdate(PartialUpdate):
    name: Optional[str] = Field(None, min_length=1)
    code: Optional[str] = Field(None, min_length=1)
    notes: Optional[str] = None

    @field_validator("name", "code")
    @classmethod
    def not_null(cls, value, info):
        return reject_null(value, info.field_name)


class Service(ServiceBase):
    id: int
    customer_id: int

    model_config = ConfigDict(from_attributes=True)
