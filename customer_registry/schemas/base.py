# customer_registry/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Aceita snake_case ou camelCase na entrada e responde em camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartialUpdate(CamelModel):
    """Base for partial-update payloads.

    Only the fields the caller actually sent are merged; a field left out is
    different from a field explicitly set to ``null``.
    """

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


def reject_null(value, field_name: str):
    if value is None:
        raise ValueError(f"{field_name} may not be null")
    return value
