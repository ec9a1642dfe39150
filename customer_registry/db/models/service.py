# customer_registry/db/models/service.py
from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from customer_registry.db.base_class import Base


class Service(Base):
    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String, nullable=False)
    code = Column(String, nullable=False, index=True)  # Código do negócio, não é único
    notes = Column(Text, nullable=True)

    customer = relationship("Customer", back_populates="services")
