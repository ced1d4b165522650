# app/shared/database/models.py
from sqlalchemy import (
    Column, Integer, String, DateTime, Text, ForeignKey, CheckConstraint, func
)
from sqlalchemy.orm import relationship
from datetime import datetime, timedelta
from typing import Optional

from app.config.database import Base

DEFAULT_BUSY_WINDOW = timedelta(hours=1)

# =====================================================
# TIMESTAMP MIXIN
# =====================================================
class TimestampMixin:
    """Adds created_at and updated_at columns"""
    created_at = Column(DateTime, nullable=False, server_default=func.current_timestamp())
    updated_at = Column(DateTime, nullable=False, server_default=func.current_timestamp(), onupdate=func.current_timestamp())


# =====================================================
# CITIES
# =====================================================

class City(Base):
    """A city; every driver, customer and restaurant belongs to exactly one"""
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)

    def __repr__(self) -> str:
        return f"City({self.id}, {self.name!r})"


# =====================================================
# CUSTOMERS AND RESTAURANTS
# =====================================================

class Customer(Base, TimestampMixin):
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    description = Column(Text)

    city = relationship("City")

    def __repr__(self) -> str:
        return f"Customer({self.id}, {self.name!r})"


class Restaurant(Base, TimestampMixin):
    __tablename__ = "restaurants"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    description = Column(Text)

    city = relationship("City")

    def __repr__(self) -> str:
        return f"Restaurant({self.id}, {self.name!r})"


# =====================================================
# DRIVERS
# =====================================================

class Driver(Base, TimestampMixin):
    """
    A delivery driver.

    Only the order service mutates ``last_start_time_delivery`` and
    ``total_distance``; both change together when a delivery is assigned.
    """
    __tablename__ = "drivers"
    __table_args__ = (
        CheckConstraint("total_distance >= 0", name="ck_drivers_total_distance_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    last_start_time_delivery = Column(DateTime, nullable=True)
    total_distance = Column(Integer, nullable=False, default=0)

    city = relationship("City")

    def __init__(self, **kwargs):
        # Column defaults only apply on flush; transient drivers need them too
        kwargs.setdefault("total_distance", 0)
        kwargs.setdefault("last_start_time_delivery", None)
        super().__init__(**kwargs)

    def add_distance(self, distance: int) -> None:
        if distance < 0:
            raise ValueError(f"Distance must be non-negative, got {distance}")
        self.total_distance += distance

    def is_available_at(self, delivery_time: datetime, busy_window: timedelta = DEFAULT_BUSY_WINDOW) -> bool:
        """
        A driver without deliveries is always free. Otherwise they are busy
        until ``busy_window`` after their last start, and free strictly after.
        """
        if self.last_start_time_delivery is None:
            return True
        return self.last_start_time_delivery + busy_window < delivery_time

    def busy_until(self, busy_window: timedelta = DEFAULT_BUSY_WINDOW) -> Optional[datetime]:
        if self.last_start_time_delivery is None:
            return None
        return self.last_start_time_delivery + busy_window

    def __repr__(self) -> str:
        return f"Driver({self.id}, {self.name!r}, total_distance={self.total_distance})"


# =====================================================
# DELIVERIES
# =====================================================

class Delivery(Base):
    """A driver assigned to carry an order; written once, never updated"""
    __tablename__ = "deliveries"
    __table_args__ = (
        CheckConstraint("distance >= 0", name="ck_deliveries_distance_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(Integer, ForeignKey("drivers.id"), nullable=False, index=True)
    restaurant_id = Column(Integer, ForeignKey("restaurants.id"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    delivery_time = Column(DateTime, nullable=False)
    distance = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, server_default=func.current_timestamp())

    driver = relationship("Driver")
    restaurant = relationship("Restaurant")
    customer = relationship("Customer")

    def __repr__(self) -> str:
        return f"Delivery({self.id}, driver={self.driver_id}, distance={self.distance})"
