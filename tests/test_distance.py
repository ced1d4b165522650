import random
from types import SimpleNamespace

import pytest

from app.modules.delivery.distance import RandomDistance, FixedDistance, build_distance_function


def test_random_distance_stays_in_range():
    distance = RandomDistance(rng=random.Random(3))
    values = [distance(None, None) for _ in range(500)]

    assert all(0 <= v < 20 for v in values)
    assert len(set(values)) > 1


def test_random_distance_is_reproducible_with_seeded_rng():
    first = RandomDistance(upper=50, rng=random.Random(11))
    second = RandomDistance(upper=50, rng=random.Random(11))
    assert [first(None, None) for _ in range(10)] == [second(None, None) for _ in range(10)]


def test_fixed_distance():
    assert FixedDistance(6)(None, None) == 6


@pytest.mark.parametrize("factory", [
    lambda: RandomDistance(upper=0),
    lambda: FixedDistance(-2),
])
def test_invalid_distance_configuration(factory):
    with pytest.raises(ValueError):
        factory()


def test_build_distance_function_from_settings():
    fixed = build_distance_function(SimpleNamespace(fixed_delivery_distance=3, max_delivery_distance=20))
    assert isinstance(fixed, FixedDistance)
    assert fixed.value == 3

    randomized = build_distance_function(SimpleNamespace(fixed_delivery_distance=None, max_delivery_distance=8))
    assert isinstance(randomized, RandomDistance)
    assert randomized.upper == 8
