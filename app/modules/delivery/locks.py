# app/modules/delivery/locks.py
import threading
from typing import Dict


class CityLocks:
    """
    One lock per city id.

    Driver selection and the driver update that follows must not interleave
    with another order for the same city, or two orders could both pick the
    same free driver.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def for_city(self, city_id: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(city_id)
            if lock is None:
                lock = self._locks[city_id] = threading.Lock()
            return lock


# Shared by every OrderService in the process
city_locks = CityLocks()
