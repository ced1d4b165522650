# app/modules/registry/__init__.py
"""
Registry module - cities, customers, restaurants and drivers

Holds the record store the order service works against: every entity is
looked up by name, and drivers, customers and restaurants by city.

Architecture:
- router.py: registration and listing endpoints
- service.py: registration rules (unique names, known cities)
- repository.py: SQLAlchemy repositories per entity
- schemas.py: request/response models
"""

from .router import router
from .service import RegistryService
from .repository import CityRepository, CustomerRepository, RestaurantRepository, DriverRepository

__all__ = [
    "router",
    "RegistryService",
    "CityRepository",
    "CustomerRepository",
    "RestaurantRepository",
    "DriverRepository"
]
