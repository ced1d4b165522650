# app/modules/registry/router.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from .service import RegistryService
from .schemas import (
    CityCreate, CustomerCreate, RestaurantCreate, DriverCreate,
    CityResponse, CustomerResponse, RestaurantResponse, DriverResponse,
    CityListResponse, CustomerListResponse, RestaurantListResponse, DriverListResponse
)

router = APIRouter()

@router.post("/cities", response_model=CityResponse, status_code=status.HTTP_201_CREATED)
async def create_city(
    city_data: CityCreate,
    db: Session = Depends(get_db)
):
    """
    Register a city

    **Validations:**
    - City names are unique (409 on duplicates)
    """
    service = RegistryService(db)
    return await service.create_city(city_data)

@router.get("/cities", response_model=CityListResponse)
async def list_cities(db: Session = Depends(get_db)):
    """List registered cities"""
    service = RegistryService(db)
    return await service.list_cities()

@router.post("/customers", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db)
):
    """
    Register a customer

    Only registered customers can place orders, and only with restaurants
    of their own city.

    **Validations:**
    - City must exist (404)
    - Customer names are unique (409)
    """
    service = RegistryService(db)
    return await service.create_customer(customer_data)

@router.get("/customers", response_model=CustomerListResponse)
async def list_customers(db: Session = Depends(get_db)):
    service = RegistryService(db)
    return await service.list_customers()

@router.post("/restaurants", response_model=RestaurantResponse, status_code=status.HTTP_201_CREATED)
async def create_restaurant(
    restaurant_data: RestaurantCreate,
    db: Session = Depends(get_db)
):
    """
    Register a restaurant

    **Validations:**
    - City must exist (404)
    - Restaurant names are unique (409)
    """
    service = RegistryService(db)
    return await service.create_restaurant(restaurant_data)

@router.get("/restaurants", response_model=RestaurantListResponse)
async def list_restaurants(db: Session = Depends(get_db)):
    service = RegistryService(db)
    return await service.list_restaurants()

@router.post("/drivers", response_model=DriverResponse, status_code=status.HTTP_201_CREATED)
async def create_driver(
    driver_data: DriverCreate,
    db: Session = Depends(get_db)
):
    """
    Register a driver

    New drivers start free, with no deliveries and a total distance of 0.
    """
    service = RegistryService(db)
    return await service.create_driver(driver_data)

@router.get("/drivers", response_model=DriverListResponse)
async def list_drivers(
    city: Optional[str] = Query(None, description="Only drivers of this city"),
    db: Session = Depends(get_db)
):
    """List drivers, optionally filtered by city"""
    service = RegistryService(db)
    return await service.list_drivers(city)

@router.get("/health")
async def registry_health():
    """Health check for the registry module"""
    return {
        "service": "registry",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "City registration",
            "Customer registration",
            "Restaurant registration",
            "Driver registration"
        ]
    }
