from datetime import datetime, timedelta

import pytest

from app.shared.database.models import City, Driver
from app.modules.delivery.order_service import select_driver, rank_drivers, as_naive_utc

START = datetime(2024, 5, 1, 18, 30)


def make_driver(driver_id, total_distance=0, last_start=None, city=None):
    city = city or City(id=1, name="Tel-Aviv")
    return Driver(
        id=driver_id,
        name=f"driver_{driver_id}",
        city_id=city.id,
        city=city,
        total_distance=total_distance,
        last_start_time_delivery=last_start
    )


def test_new_driver_starts_free_with_zero_distance():
    driver = Driver(name="Mary")
    assert driver.total_distance == 0
    assert driver.last_start_time_delivery is None
    assert driver.is_available_at(START)
    assert driver.busy_until() is None


@pytest.mark.parametrize("offset, available", [
    (timedelta(minutes=-30), False),
    (timedelta(0), False),
    (timedelta(minutes=59), False),
    (timedelta(hours=1), False),
    (timedelta(hours=1, microseconds=1), True),
    (timedelta(days=3), True),
])
def test_driver_is_busy_for_one_hour(offset, available):
    driver = make_driver(1, last_start=START)
    assert driver.is_available_at(START + offset) is available


def test_busy_until():
    driver = make_driver(1, last_start=START)
    assert driver.busy_until() == START + timedelta(hours=1)
    assert driver.busy_until(timedelta(minutes=15)) == START + timedelta(minutes=15)


def test_add_distance_accumulates():
    driver = make_driver(1)
    driver.add_distance(7)
    driver.add_distance(0)
    driver.add_distance(12)
    assert driver.total_distance == 19


def test_add_distance_rejects_negative():
    driver = make_driver(1, total_distance=4)
    with pytest.raises(ValueError):
        driver.add_distance(-1)
    assert driver.total_distance == 4


def test_select_driver_prefers_smallest_distance():
    drivers = [make_driver(1, 9), make_driver(2, 3), make_driver(3, 5)]
    assert select_driver(drivers, START).id == 2


def test_select_driver_skips_busy_drivers():
    drivers = [
        make_driver(1, 0, last_start=START - timedelta(minutes=20)),
        make_driver(2, 10),
        make_driver(3, 4, last_start=START - timedelta(hours=2)),
    ]
    assert select_driver(drivers, START).id == 3


def test_select_driver_keeps_first_on_ties():
    drivers = [make_driver(4, 2), make_driver(1, 2), make_driver(7, 2)]
    assert select_driver(drivers, START).id == 4


def test_select_driver_none_when_everyone_is_busy():
    drivers = [make_driver(i, last_start=START) for i in range(1, 4)]
    assert select_driver(drivers, START + timedelta(minutes=30)) is None
    assert select_driver([], START) is None


def test_rank_drivers_descending():
    haifa = City(id=2, name="Haifa")
    drivers = [make_driver(1, 3), make_driver(2, 17, city=haifa), make_driver(3, 0), make_driver(4, 9)]

    ranking = rank_drivers(drivers)

    assert [entry.driver_id for entry in ranking] == [2, 4, 1, 3]
    assert ranking[0].city_name == "Haifa"
    assert ranking[0].total_distance == 17


def test_as_naive_utc_leaves_naive_values():
    assert as_naive_utc(START) is START
