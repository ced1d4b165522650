# app/modules/delivery/order_service.py
"""
Order placement and driver assignment.

An order names a registered customer, a restaurant in the customer's city
and a delivery time. Among the drivers of that city, the one who is free at
that time and has covered the least distance so far gets the delivery.
Ties keep the first driver the repository returns.
"""

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional

from app.shared.database.models import City, Customer, Delivery, Driver, Restaurant, DEFAULT_BUSY_WINDOW
from .distance import DistanceFunction, RandomDistance
from .locks import CityLocks, city_locks

logger = logging.getLogger(__name__)


class RejectionReason(str, Enum):
    UNREGISTERED_CUSTOMER = "unregistered_customer"
    CROSS_CITY = "cross_city"
    NO_AVAILABLE_DRIVER = "no_available_driver"


REJECTION_MESSAGES = {
    RejectionReason.UNREGISTERED_CUSTOMER: "An unregistered customer tried to place an order",
    RejectionReason.CROSS_CITY: "Customer tried to order from a restaurant outside their city",
    RejectionReason.NO_AVAILABLE_DRIVER: "There is no driver available in the city of the delivery",
}


class OrderRejectedError(Exception):
    """An order broke a business rule; no delivery was created"""

    def __init__(self, reason: RejectionReason, detail: Optional[str] = None):
        self.reason = reason
        self.detail = detail or REJECTION_MESSAGES[reason]
        super().__init__(self.detail)


class DriverDistance(NamedTuple):
    driver_id: int
    driver_name: str
    city_name: str
    total_distance: int


def as_naive_utc(moment: datetime) -> datetime:
    """Stored timestamps are naive UTC; aware inputs are converted first."""
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def _city_id(entity) -> Optional[int]:
    if entity.city_id is not None:
        return entity.city_id
    return entity.city.id if entity.city is not None else None


def select_driver(drivers: Iterable[Driver], delivery_time: datetime,
                  busy_window: timedelta = DEFAULT_BUSY_WINDOW) -> Optional[Driver]:
    """Free driver with the strictly smallest total distance, first one on ties."""
    chosen = None
    for driver in drivers:
        if not driver.is_available_at(delivery_time, busy_window):
            continue
        if chosen is None or driver.total_distance < chosen.total_distance:
            chosen = driver
    return chosen


def rank_drivers(drivers: Iterable[Driver]) -> List[DriverDistance]:
    ranking = [
        DriverDistance(d.id, d.name, d.city.name if d.city is not None else "", d.total_distance)
        for d in drivers
    ]
    ranking.sort(key=lambda entry: entry.total_distance, reverse=True)
    return ranking


class OrderService:
    """
    Assigns drivers to orders and reports the distance each driver covered.

    ``customers``, ``drivers`` and ``deliveries`` are the record store: any
    objects with the repository methods used below. ``log`` receives every
    assignment and rejection.
    """

    def __init__(
        self,
        customers,
        drivers,
        deliveries,
        distance_fn: Optional[DistanceFunction] = None,
        busy_window: timedelta = DEFAULT_BUSY_WINDOW,
        locks: Optional[CityLocks] = None,
        log: Optional[logging.Logger] = None
    ):
        self.customers = customers
        self.drivers = drivers
        self.deliveries = deliveries
        self.distance_fn = distance_fn or RandomDistance()
        self.busy_window = busy_window
        self.locks = locks or city_locks
        self.log = log or logger
        self.started = False

    # ==================== LIFECYCLE ====================

    def start(self) -> "OrderService":
        self.started = True
        self.log.debug("Order service started", extra={"event": "order_service_started"})
        return self

    def close(self) -> None:
        if self.started:
            self.started = False
            self.log.debug("Order service stopped", extra={"event": "order_service_stopped"})

    def __enter__(self) -> "OrderService":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ==================== ORDERS ====================

    def create_order_and_assign_driver(self, customer: Customer, restaurant: Restaurant,
                                       delivery_time: datetime) -> Optional[Delivery]:
        """
        Place an order and hand it to the least-loaded free driver of the city.

        Returns None (and logs an error) when the customer is not registered,
        the restaurant is in another city, or nobody in the city is free at
        ``delivery_time``.
        """
        try:
            return self.assign_driver(customer, restaurant, delivery_time)
        except OrderRejectedError:
            return None

    def assign_driver(self, customer: Customer, restaurant: Restaurant,
                      delivery_time: datetime) -> Delivery:
        """Same as ``create_order_and_assign_driver`` but raises OrderRejectedError."""
        delivery_time = as_naive_utc(delivery_time)

        registered = self.customers.find_by_name(customer.name)
        if registered is None:
            self._reject(RejectionReason.UNREGISTERED_CUSTOMER, customer, restaurant)

        city_id = _city_id(registered)
        if city_id != _city_id(restaurant):
            self._reject(RejectionReason.CROSS_CITY, registered, restaurant)

        with self.locks.for_city(city_id):
            driver = select_driver(
                self.drivers.find_all_by_city(registered.city), delivery_time, self.busy_window
            )
            if driver is None:
                self._reject(RejectionReason.NO_AVAILABLE_DRIVER, registered, restaurant)

            distance = self.distance_fn(registered, restaurant)
            if distance < 0:
                raise ValueError(f"Distance function returned a negative distance: {distance}")

            delivery = Delivery(
                driver=driver,
                restaurant=restaurant,
                customer=registered,
                delivery_time=delivery_time,
                distance=distance
            )
            previous = (driver.total_distance, driver.last_start_time_delivery)
            driver.add_distance(distance)
            driver.last_start_time_delivery = delivery_time

            try:
                delivery = self.deliveries.save(delivery)
                self.drivers.save(driver)
            except Exception:
                # Not persisted: the driver's totals must not count this delivery
                driver.total_distance, driver.last_start_time_delivery = previous
                self.log.exception(
                    f"Could not store the delivery for driver {driver.name}",
                    extra={"event": "delivery_not_saved", "driver_id": driver.id}
                )
                raise

            self.log.info(
                f"Driver {driver.name} made the delivery from {restaurant.name} "
                f"restaurant to {registered.name} at {delivery_time.isoformat()}",
                extra={
                    "event": "driver_assigned",
                    "driver_id": driver.id,
                    "customer_id": registered.id,
                    "restaurant_id": restaurant.id,
                    "distance": distance,
                }
            )

        return delivery

    def _reject(self, reason: RejectionReason, customer: Customer, restaurant: Restaurant):
        self.log.error(
            REJECTION_MESSAGES[reason],
            extra={
                "event": "order_rejected",
                "reason": reason.value,
                "customer_name": customer.name,
                "restaurant_name": restaurant.name,
            }
        )
        raise OrderRejectedError(reason)

    # ==================== REPORTS ====================

    def get_driver_rank_report(self) -> List[DriverDistance]:
        """All drivers, most distance covered first"""
        return rank_drivers(self.drivers.find_all())

    def get_driver_rank_report_by_city(self, city: City) -> List[DriverDistance]:
        """Drivers of ``city``, most distance covered first"""
        return rank_drivers(self.drivers.find_all_by_city(city))
