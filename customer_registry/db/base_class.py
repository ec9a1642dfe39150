import re

from sqlalchemy import Column, Integer
from sqlalchemy.orm import as_declarative, declared_attr


@as_declarative()
class Base:
    """
    Base class which provides automated table name
    and surrogate primary key column.
    """

    @declared_attr
    def __tablename__(cls) -> str:
        # Ex: PhoneNumber -> phone_numbers
        return re.sub(r"(?<!^)(?=[A-Z])", "_", cls.__name__).lower() + "s"

    # AUTOINCREMENT no SQLite: ids apagados nunca são reutilizados
    @declared_attr
    def __table_args__(cls):
        return {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
