# customer_registry/crud/crud_customer.py
from typing import List, Optional, Union, Dict, Any

from sqlalchemy.orm import Session

from customer_registry.db.models.customer import Customer
from customer_registry.schemas.customer import CustomerCreate, CustomerUpdate


class CRUDCustomer:
    """Operações de cliente sobre uma sessão aberta.

    Nada aqui faz commit: quem abre a transação (``session_scope``) decide
    quando gravar, para que as operações em várias etapas sejam atômicas.
    """

    def get(self, db: Session, id: int) -> Optional[Customer]:
        return db.get(Customer, id)

    def get_for_update(self, db: Session, id: int) -> Optional[Customer]:
        # Trava a linha do cliente (ignorado no SQLite)
        return db.query(Customer).filter(Customer.id == id).with_for_update().first()

    def get_multi(self, db: Session) -> List[Customer]:
        return db.query(Customer).order_by(Customer.name, Customer.id).all()

    def create(self, db: Session, *, obj_in: CustomerCreate) -> Customer:
        db_obj = Customer(
            name=obj_in.name,
            responsible=obj_in.responsible,
        )
        db.add(db_obj)
        db.flush()
        return db_obj

    def update(
        self, db: Session, *, db_obj: Customer, obj_in: Union[CustomerUpdate, Dict[str, Any]]
    ) -> Customer:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.changes()

        for field in update_data:
            if hasattr(db_obj, field):
                setattr(db_obj, field, update_data[field])

        db.add(db_obj)
        db.flush()
        return db_obj

    def remove(self, db: Session, *, id: int) -> Optional[Customer]:
        obj = db.get(Customer, id)
        if obj:
            # cascade="all, delete-orphan" remove telefones e serviços na mesma transação
            db.delete(obj)
            db.flush()
        return obj


customer = CRUDCustomer()
