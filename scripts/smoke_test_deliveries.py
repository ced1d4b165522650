#!/usr/bin/env python3
"""
Smoke run for the delivery flow against a running server
Seed first (scripts/seed_demo_data.py), then: python scripts/smoke_test_deliveries.py
"""

import asyncio
from datetime import datetime

import httpx

BASE_URL = "http://localhost:8000/api/v1"

TLV_ORDERS = [
    ("Beethoven", "vegan"),
    ("Bach", "cafe"),
    ("Rachmaninoff", "chinese"),
    ("Beethoven", "restaurant"),
]


class DeliveriesTester:
    def __init__(self):
        self.client = httpx.AsyncClient(base_url=BASE_URL)

    async def place_order(self, customer: str, restaurant: str, delivery_time: datetime):
        response = await self.client.post("/deliveries", json={
            "customer_name": customer,
            "restaurant_name": restaurant,
            "delivery_time": delivery_time.isoformat()
        })

        if response.status_code == 201:
            delivery = response.json()["delivery"]
            print(f"OK  {customer} <- {restaurant}: driver {delivery['driver_name']}, distance {delivery['distance']}")
            return delivery

        print(f"--  {customer} <- {restaurant}: {response.status_code} {response.json().get('detail')}")
        return None

    async def test_same_hour_orders(self):
        """Three Tel-Aviv drivers: the fourth order in the same hour has nobody left"""
        print("\nTest: same-hour orders in Tel-Aviv")
        now = datetime.now().replace(microsecond=0)
        results = [await self.place_order(c, r, now) for c, r in TLV_ORDERS]

        drivers = {d["driver_name"] for d in results[:3] if d}
        return len(drivers) == 3 and results[3] is None

    async def test_cross_city_order(self):
        print("\nTest: cross-city order")
        return await self.place_order("Mozart", "vegan", datetime.now()) is None

    async def test_rank_report(self):
        print("\nTest: driver ranking")
        response = await self.client.get("/reports/drivers/rank")
        if response.status_code != 200:
            print(f"Error getting ranking: {response.status_code}")
            return False

        ranking = response.json()["ranking"]
        for entry in ranking:
            print(f"  #{entry['rank']} {entry['driver_name']} ({entry['city_name']}): {entry['total_distance']}")

        totals = [entry["total_distance"] for entry in ranking]
        return totals == sorted(totals, reverse=True)

    async def run_all_tests(self):
        results = {
            "same_hour_orders": await self.test_same_hour_orders(),
            "cross_city_order": await self.test_cross_city_order(),
            "rank_report": await self.test_rank_report(),
        }
        await self.client.aclose()

        print("\nSummary:")
        for name, passed in results.items():
            print(f"  {'PASS' if passed else 'FAIL'} {name}")
        return all(results.values())


if __name__ == "__main__":
    passed = asyncio.run(DeliveriesTester().run_all_tests())
    raise SystemExit(0 if passed else 1)
