import threading
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

from app.shared.database.models import City, Customer, Driver, Restaurant
from app.modules.delivery.locks import CityLocks
from app.modules.delivery.order_service import OrderService

RUSH_HOUR = datetime(2024, 5, 1, 19, 0)


class MemoryCustomers:
    def __init__(self, customers):
        self.by_name = {c.name: c for c in customers}

    def find_by_name(self, name):
        return self.by_name.get(name)


class MemoryDrivers:
    def __init__(self, drivers):
        self.items = list(drivers)

    def find_all(self):
        return list(self.items)

    def find_all_by_city(self, city):
        return [d for d in self.items if d.city_id == city.id]

    def save(self, driver):
        return driver


class MemoryDeliveries:
    def __init__(self):
        self.items = []
        self._lock = threading.Lock()

    def save(self, delivery):
        with self._lock:
            delivery.id = len(self.items) + 1
            self.items.append(delivery)
        return delivery


def slow_distance(customer, restaurant):
    # Widens the window between driver selection and the driver update
    time.sleep(0.005)
    return 4


def build_city():
    tlv = City(id=1, name="Tel-Aviv")
    drivers = [Driver(id=i, name=f"driver_{i}", city_id=1, city=tlv) for i in range(1, 4)]
    customers = [
        Customer(id=i, name=f"customer_{i}", city_id=1, city=tlv) for i in range(1, 11)
    ]
    restaurant = Restaurant(id=1, name="vegan", city_id=1, city=tlv)
    return drivers, customers, restaurant


def test_city_locks_are_per_city():
    locks = CityLocks()
    assert locks.for_city(1) is locks.for_city(1)
    assert locks.for_city(1) is not locks.for_city(2)


def test_concurrent_orders_never_share_a_driver():
    drivers, customers, restaurant = build_city()
    deliveries = MemoryDeliveries()
    service = OrderService(
        customers=MemoryCustomers(customers),
        drivers=MemoryDrivers(drivers),
        deliveries=deliveries,
        distance_fn=slow_distance,
        locks=CityLocks()
    )
    barrier = threading.Barrier(len(customers))

    def order(customer):
        barrier.wait()
        return service.create_order_and_assign_driver(customer, restaurant, RUSH_HOUR)

    with ThreadPoolExecutor(max_workers=len(customers)) as pool:
        results = list(pool.map(order, customers))

    assigned = [r for r in results if r is not None]
    assert len(assigned) == 3
    assert len({d.driver.id for d in assigned}) == 3
    assert len(deliveries.items) == 3
    assert all(d.total_distance == 4 for d in drivers)
    assert all(d.last_start_time_delivery == RUSH_HOUR for d in drivers)
