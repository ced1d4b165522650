# app/modules/delivery/repository.py
from sqlalchemy.orm import Session
from typing import List, Optional

from app.shared.database.models import Delivery, Driver

class DeliveryRepository:
    def __init__(self, db: Session):
        self.db = db

    def save(self, delivery: Delivery) -> Delivery:
        try:
            self.db.add(delivery)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(delivery)
        return delivery

    def find_by_id(self, delivery_id: int) -> Optional[Delivery]:
        return self.db.query(Delivery).filter(Delivery.id == delivery_id).first()

    def find_all(self) -> List[Delivery]:
        return self.db.query(Delivery).order_by(Delivery.id).all()

    def find_all_by_driver(self, driver: Driver) -> List[Delivery]:
        return self.db.query(Delivery).filter(
            Delivery.driver_id == driver.id
        ).order_by(Delivery.delivery_time).all()
