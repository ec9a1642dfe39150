# customer_registry/db/models/customer.py
from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from customer_registry.db.base_class import Base


class Customer(Base):
    name = Column(String, nullable=False, index=True)
    responsible = Column(Text, nullable=True)

    # Relacionamentos: telefones e serviços vivem e morrem com o cliente
    phone_numbers = relationship(
        "PhoneNumber",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="PhoneNumber.id",
    )
    services = relationship(
        "Service",
        back_populates="customer",
        cascade="all, delete-orphan",
        order_by="Service.id",
    )
