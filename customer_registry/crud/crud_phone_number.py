# customer_registry/crud/crud_phone_number.py
from typing import List, Optional, Union, Dict, Any

from sqlalchemy.orm import Session

from customer_registry.db.models.phone_number import PhoneNumber
from customer_registry.schemas.phone_number import PhoneNumberCreate, PhoneNumberUpdate
from customer_registry.utils import normalize_phone


class CRUDPhoneNumber:
    def get(self, db: Session, id: int) -> Optional[PhoneNumber]:
        return db.get(PhoneNumber, id)

    def get_for_update(self, db: Session, id: int) -> Optional[PhoneNumber]:
        """Relê a linha do banco (descartando o estado em memória) e a trava."""
        return db.get(PhoneNumber, id, with_for_update=True, populate_existing=True)

    def get_multi_by_customer(self, db: Session, *, customer_id: int) -> List[PhoneNumber]:
        return (
            db.query(PhoneNumber)
            .filter(PhoneNumber.customer_id == customer_id)
            .order_by(PhoneNumber.id)
            .all()
        )

    def get_by_normalized_number(self, db: Session, *, number: str) -> Optional[PhoneNumber]:
        """Primeiro telefone (menor id) cujo número sem espaços bate com a busca."""
        target = normalize_phone(number)
        # A normalização é feita em Python para não depender de funções de regex do banco
        for phone in db.query(PhoneNumber).order_by(PhoneNumber.id).all():
            if normalize_phone(phone.number) == target:
                return phone
        return None

    def demote_primaries(self, db: Session, *, customer_id: int, exclude_id: Optional[int] = None) -> int:
        """Tira a marca de principal dos telefones do cliente; retorna quantos mudaram."""
        query = db.query(PhoneNumber).filter(
            PhoneNumber.customer_id == customer_id,
            PhoneNumber.is_primary.is_(True),
        )
        if exclude_id is not None:
            query = query.filter(PhoneNumber.id != exclude_id)
        demoted = query.update({PhoneNumber.is_primary: False}, synchronize_session="fetch")
        db.flush()
        return demoted

    def create(self, db: Session, *, obj_in: PhoneNumberCreate) -> PhoneNumber:
        db_obj = PhoneNumber(
            customer_id=obj_in.customer_id,
            number=obj_in.number,
            is_primary=obj_in.is_primary,
        )
        db.add(db_obj)
        db.flush()
        return db_obj

    def update(
        self, db: Session, *, db_obj: PhoneNumber, obj_in: Union[PhoneNumberUpdate, Dict[str, Any]]
    ) -> PhoneNumber:
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.changes()

        for field in update_data:
            if field == "customer_id":
                continue
            if hasattr(db_obj, field):
                setattr(db_obj, field, update_data[field])

        db.add(db_obj)
        db.flush()
        return db_obj

    def remove(self, db: Session, *, db_obj: PhoneNumber) -> PhoneNumber:
        db.delete(db_obj)
        db.flush()
        return db_obj


phone_number = CRUDPhoneNumber()
