# app/modules/registry/service.py
from typing import Optional
from datetime import timedelta
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.shared.database.models import City, Customer, Restaurant, Driver
from .repository import CityRepository, CustomerRepository, RestaurantRepository, DriverRepository
from .schemas import (
    CityCreate, CustomerCreate, RestaurantCreate, DriverCreate,
    CityInfo, CustomerInfo, RestaurantInfo, DriverInfo,
    CityResponse, CustomerResponse, RestaurantResponse, DriverResponse,
    CityListResponse, CustomerListResponse, RestaurantListResponse, DriverListResponse
)
import logging

logger = logging.getLogger(__name__)


def city_info(city: City) -> CityInfo:
    return CityInfo(id=city.id, name=city.name)

def customer_info(customer: Customer) -> CustomerInfo:
    return CustomerInfo(
        id=customer.id,
        name=customer.name,
        city_name=customer.city.name,
        description=customer.description
    )

def restaurant_info(restaurant: Restaurant) -> RestaurantInfo:
    return RestaurantInfo(
        id=restaurant.id,
        name=restaurant.name,
        city_name=restaurant.city.name,
        description=restaurant.description
    )

def driver_info(driver: Driver) -> DriverInfo:
    return DriverInfo(
        id=driver.id,
        name=driver.name,
        city_name=driver.city.name,
        last_start_time_delivery=driver.last_start_time_delivery,
        total_distance=driver.total_distance,
        busy_until=driver.busy_until(timedelta(minutes=settings.driver_busy_minutes))
    )


class RegistryService:
    def __init__(self, db: Session):
        self.db = db
        self.cities = CityRepository(db)
        self.customers = CustomerRepository(db)
        self.restaurants = RestaurantRepository(db)
        self.drivers = DriverRepository(db)

    def get_city_or_404(self, city_name: str) -> City:
        city = self.cities.find_by_name(city_name)
        if not city:
            raise HTTPException(status_code=404, detail=f"City '{city_name}' is not registered")
        return city

    def _ensure_name_free(self, repository, name: str, kind: str) -> None:
        if repository.find_by_name(name):
            raise HTTPException(status_code=409, detail=f"{kind} '{name}' already exists")

    # ==================== CITIES ====================

    async def create_city(self, city_data: CityCreate) -> CityResponse:
        self._ensure_name_free(self.cities, city_data.name, "City")
        city = self.cities.save(City(name=city_data.name))
        logger.info(f"City registered: {city.name} (id={city.id})")

        return CityResponse(
            success=True,
            message="City registered",
            city=city_info(city)
        )

    async def list_cities(self) -> CityListResponse:
        cities = [city_info(c) for c in self.cities.find_all()]
        return CityListResponse(
            success=True,
            message="Registered cities",
            cities=cities,
            count=len(cities)
        )

    # ==================== CUSTOMERS ====================

    async def create_customer(self, customer_data: CustomerCreate) -> CustomerResponse:
        city = self.get_city_or_404(customer_data.city_name)
        self._ensure_name_free(self.customers, customer_data.name, "Customer")

        customer = self.customers.save(Customer(
            name=customer_data.name,
            city=city,
            description=customer_data.description
        ))
        logger.info(f"Customer registered: {customer.name} in {city.name}")

        return CustomerResponse(
            success=True,
            message="Customer registered",
            customer=customer_info(customer)
        )

    async def list_customers(self) -> CustomerListResponse:
        customers = [customer_info(c) for c in self.customers.find_all()]
        return CustomerListResponse(
            success=True,
            message="Registered customers",
            customers=customers,
            count=len(customers)
        )

    # ==================== RESTAURANTS ====================

    async def create_restaurant(self, restaurant_data: RestaurantCreate) -> RestaurantResponse:
        city = self.get_city_or_404(restaurant_data.city_name)
        self._ensure_name_free(self.restaurants, restaurant_data.name, "Restaurant")

        restaurant = self.restaurants.save(Restaurant(
            name=restaurant_data.name,
            city=city,
            description=restaurant_data.description
        ))
        logger.info(f"Restaurant registered: {restaurant.name} in {city.name}")

        return RestaurantResponse(
            success=True,
            message="Restaurant registered",
            restaurant=restaurant_info(restaurant)
        )

    async def list_restaurants(self) -> RestaurantListResponse:
        restaurants = [restaurant_info(r) for r in self.restaurants.find_all()]
        return RestaurantListResponse(
            success=True,
            message="Registered restaurants",
            restaurants=restaurants,
            count=len(restaurants)
        )

    # ==================== DRIVERS ====================

    async def create_driver(self, driver_data: DriverCreate) -> DriverResponse:
        city = self.get_city_or_404(driver_data.city_name)
        self._ensure_name_free(self.drivers, driver_data.name, "Driver")

        driver = self.drivers.save(Driver(name=driver_data.name, city=city))
        logger.info(f"Driver registered: {driver.name} in {city.name}")

        return DriverResponse(
            success=True,
            message="Driver registered",
            driver=driver_info(driver)
        )

    async def list_drivers(self, city_name: Optional[str] = None) -> DriverListResponse:
        if city_name:
            city = self.get_city_or_404(city_name)
            drivers = self.drivers.find_all_by_city(city)
            message = f"Drivers in {city.name}"
        else:
            drivers = self.drivers.find_all()
            message = "Registered drivers"

        items = [driver_info(d) for d in drivers]
        return DriverListResponse(
            success=True,
            message=message,
            drivers=items,
            count=len(items)
        )
