# customer_registry/crud/crud_service.py
from typing import List, Optional, Union, Dict, Any

from sqlalchemy.orm import Session

from customer_registry.db.models.service import Service
from customer_registry.schemas.service import ServiceCreate, ServiceUpdate


class CRUDService:
    def get(self, db: Session, id: int) -> Optional[Service]:
        return db.get(Service, id)

    def get_multi_by_customer(self, db: Session, *, customer_id: int) -> List[Service]:
        return (
            db.query(Service)
            .filter(Service.customer_id == customer_id)
            .order_by(Service.id)
            .all()
        )

    def create(self, db: Session, *, obj_in: ServiceCreate) -> Service:
        db_obj = Service(
            customer_id=obj_in.customer_id,
            name=obj_in.name,
            code=obj_in.code,
            notes=obj_in.notes,
        )
        db.add(db_obj)
        db.flush()
        return db_obj

    def update(
        self, db: Session, *, db_obj: Service, obj_in: Union[ServiceUpdate, Dict[str, Any]]
    ) -> Service:
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

    def remove(self, db: Session, *, id: int) -> Optional[Service]:
        obj = db.get(Service, id)
        if obj:
            db.delete(obj)
            db.flush()
        return obj


service = CRUDService()
