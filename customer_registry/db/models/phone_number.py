# customer_registry/db/models/phone_number.py
from sqlalchemy import Boolean, Column, ForeignKey, Index, Integer, String, false
from sqlalchemy.orm import relationship

from customer_registry.db.base_class import Base


class PhoneNumber(Base):
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    number = Column(String, nullable=False)
    is_primary = Column(Boolean, nullable=False, default=False, server_default=false())

    customer = relationship("Customer", back_populates="phone_numbers")


# No máximo um telefone principal por cliente
Index(
    "uq_phone_numbers_primary_per_customer",
    PhoneNumber.customer_id,
    unique=True,
    postgresql_where=PhoneNumber.is_primary,
    sqlite_where=PhoneNumber.is_primary,
)
