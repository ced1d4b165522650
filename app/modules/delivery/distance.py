# app/modules/delivery/distance.py
"""
Distance functions for new deliveries.

There is no routing yet: a distance function takes the customer and the
restaurant and returns a non-negative whole distance. The order service
only depends on that signature, so a real routing backend can replace
these without touching driver selection.
"""

import random
from typing import Callable, Optional

from app.shared.database.models import Customer, Restaurant

DistanceFunction = Callable[[Customer, Restaurant], int]


class RandomDistance:
    """Uniform placeholder distance in ``[0, upper)``"""

    def __init__(self, upper: int = 20, rng: Optional[random.Random] = None):
        if upper <= 0:
            raise ValueError("upper must be > 0")
        self.upper = upper
        self.rng = rng or random.Random()

    def __call__(self, customer: Customer, restaurant: Restaurant) -> int:
        return self.rng.randrange(self.upper)


class FixedDistance:
    def __init__(self, value: int):
        if value < 0:
            raise ValueError("value must be >= 0")
        self.value = value

    def __call__(self, customer: Customer, restaurant: Restaurant) -> int:
        return self.value


def build_distance_function(settings) -> DistanceFunction:
    if settings.fixed_delivery_distance is not None:
        return FixedDistance(settings.fixed_delivery_distance)
    return RandomDistance(settings.max_delivery_distance)
