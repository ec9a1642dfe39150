# customer_registry/schemas/phone_number.py
from typing import Optional

from pydantic import ConfigDict, Field, computed_field, field_validator

from customer_registry import utils

from .base import CamelModel, PartialUpdate, reject_null


class PhoneNumberBase(CamelModel):
    number: str = Field(..., min_length=1, examples=["+966 54 123 4567"])
    is_primary: bool = False


class PhoneNumberCreate(PhoneNumberBase):
    customer_id: int


class PhoneNumberUpdate(PartialUpdate):
    # customer_id é imutável depois da criação
    number: Optional[str] = Field(None, min_length=1)
    is_primary: Optional[bool] = None

    @field_validator("number", "is_primary")
    @classmethod
    def not_null(cls, value, info):
        return reject_null(value, info.field_name)


class PhoneNumber(PhoneNumberBase):
    id: int
    customer_id: int

    model_config = ConfigDict(from_attributes=True)

    @computed_field(alias="whatsappLink")
    @property
    def whatsapp_link(self) -> str:
        return utils.whatsapp_link(self.number)
