# app/modules/registry/repository.py
from sqlalchemy.orm import Session
from typing import Iterable, List

from app.shared.database.models import City, Customer, Restaurant, Driver
import logging

logger = logging.getLogger(__name__)

class NamedEntityRepository:
    """Lookup/save operations shared by every entity that is keyed by name"""
    model = None

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, entity_id: int):
        return self.db.query(self.model).filter(self.model.id == entity_id).first()

    def find_by_name(self, name: str):
        if name is None:
            return None
        return self.db.query(self.model).filter(self.model.name == name).first()

    def find_all(self) -> List:
        return self.db.query(self.model).order_by(self.model.id).all()

    def save(self, entity):
        """Insert or update; the session is rolled back if the commit fails"""
        try:
            self.db.add(entity)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(entity)
        return entity

    def save_all(self, entities: Iterable) -> List:
        entities = list(entities)
        try:
            self.db.add_all(entities)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for entity in entities:
            self.db.refresh(entity)
        logger.debug(f"Saved {len(entities)} {self.model.__tablename__}")
        return entities


class CityOwnedRepository(NamedEntityRepository):
    def find_all_by_city(self, city: City) -> List:
        return self.db.query(self.model).filter(
            self.model.city_id == city.id
        ).order_by(self.model.id).all()


class CityRepository(NamedEntityRepository):
    model = City


class CustomerRepository(CityOwnedRepository):
    model = Customer


class RestaurantRepository(CityOwnedRepository):
    model = Restaurant


class DriverRepository(CityOwnedRepository):
    model = Driver
