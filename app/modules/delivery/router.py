# app/modules/delivery/router.py
from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from .distance import DistanceFunction
from .service import DeliveryService, get_distance_function
from .schemas import OrderCreate, DeliveryResponse, DeliveryListResponse

router = APIRouter()

@router.post("", response_model=DeliveryResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    distance_fn: DistanceFunction = Depends(get_distance_function),
    db: Session = Depends(get_db)
):
    """
    Place an order and assign a driver

    **Driver selection:**
    - Only drivers of the customer's city are considered
    - A driver is busy for one hour after the start of their last delivery
    - Among free drivers, the one with the least total distance wins

    **Errors:**
    - 404: restaurant not found or customer not registered
    - 422: restaurant is in another city than the customer
    - 409: no free driver in the city at the requested time
    """
    service = DeliveryService(db, distance_fn)
    return await service.create_order(order_data)

@router.get("", response_model=DeliveryListResponse)
async def list_deliveries(
    driver: Optional[str] = Query(None, description="Only deliveries of this driver"),
    db: Session = Depends(get_db)
):
    """List deliveries, optionally for a single driver"""
    service = DeliveryService(db)
    return await service.list_deliveries(driver)

@router.get("/health")
async def delivery_health():
    """Health check for the delivery module"""
    return {
        "service": "delivery",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Order placement",
            "Driver assignment by availability and distance",
            "Per-city assignment locking",
            "Delivery history"
        ]
    }

@router.get("/{delivery_id}", response_model=DeliveryResponse)
async def get_delivery(
    delivery_id: int = Path(..., description="Delivery ID"),
    db: Session = Depends(get_db)
):
    service = DeliveryService(db)
    return await service.get_delivery(delivery_id)
