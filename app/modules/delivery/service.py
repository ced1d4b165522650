# app/modules/delivery/service.py
from typing import Optional
from datetime import timedelta
from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.config.settings import settings
from app.shared.database.models import Delivery
from app.modules.registry.repository import CustomerRepository, RestaurantRepository, DriverRepository
from .repository import DeliveryRepository
from .distance import DistanceFunction, build_distance_function
from .order_service import OrderService, OrderRejectedError, RejectionReason
from .schemas import OrderCreate, DeliveryInfo, DeliveryResponse, DeliveryListResponse
import logging

logger = logging.getLogger(__name__)

REJECTION_STATUS = {
    RejectionReason.UNREGISTERED_CUSTOMER: 404,
    RejectionReason.CROSS_CITY: 422,
    RejectionReason.NO_AVAILABLE_DRIVER: 409,
}


def get_distance_function() -> DistanceFunction:
    """Dependency; tests override it with a fixed distance"""
    return build_distance_function(settings)


def build_order_service(db: Session, distance_fn: Optional[DistanceFunction] = None) -> OrderService:
    return OrderService(
        customers=CustomerRepository(db),
        drivers=DriverRepository(db),
        deliveries=DeliveryRepository(db),
        distance_fn=distance_fn or get_distance_function(),
        busy_window=timedelta(minutes=settings.driver_busy_minutes)
    )


def delivery_info(delivery: Delivery) -> DeliveryInfo:
    return DeliveryInfo(
        id=delivery.id,
        driver_id=delivery.driver_id,
        driver_name=delivery.driver.name,
        customer_name=delivery.customer.name,
        restaurant_name=delivery.restaurant.name,
        city_name=delivery.driver.city.name,
        delivery_time=delivery.delivery_time,
        distance=delivery.distance
    )


class DeliveryService:
    def __init__(self, db: Session, distance_fn: Optional[DistanceFunction] = None):
        self.db = db
        self.repository = DeliveryRepository(db)
        self.customers = CustomerRepository(db)
        self.restaurants = RestaurantRepository(db)
        self.drivers = DriverRepository(db)
        self.distance_fn = distance_fn

    async def create_order(self, order_data: OrderCreate) -> DeliveryResponse:
        """Place an order and assign the least-loaded free driver"""

        restaurant = self.restaurants.find_by_name(order_data.restaurant_name)
        if not restaurant:
            raise HTTPException(
                status_code=404,
                detail=f"Restaurant '{order_data.restaurant_name}' not found"
            )

        customer = self.customers.find_by_name(order_data.customer_name)
        if not customer:
            raise HTTPException(
                status_code=REJECTION_STATUS[RejectionReason.UNREGISTERED_CUSTOMER],
                detail=f"Customer '{order_data.customer_name}' is not registered"
            )

        with build_order_service(self.db, self.distance_fn) as order_service:
            try:
                delivery = order_service.assign_driver(customer, restaurant, order_data.delivery_time)
            except OrderRejectedError as e:
                raise HTTPException(status_code=REJECTION_STATUS[e.reason], detail=e.detail)

        return DeliveryResponse(
            success=True,
            message=f"Delivery assigned to {delivery.driver.name}",
            delivery=delivery_info(delivery),
            driver_total_distance=delivery.driver.total_distance
        )

    async def get_delivery(self, delivery_id: int) -> DeliveryResponse:
        delivery = self.repository.find_by_id(delivery_id)
        if not delivery:
            raise HTTPException(status_code=404, detail="Delivery not found")

        return DeliveryResponse(
            success=True,
            message="Delivery found",
            delivery=delivery_info(delivery),
            driver_total_distance=delivery.driver.total_distance
        )

    async def list_deliveries(self, driver_name: Optional[str] = None) -> DeliveryListResponse:
        if driver_name:
            driver = self.drivers.find_by_name(driver_name)
            if not driver:
                raise HTTPException(status_code=404, detail=f"Driver '{driver_name}' not found")
            deliveries = self.repository.find_all_by_driver(driver)
            message = f"Deliveries of {driver.name}"
        else:
            deliveries = self.repository.find_all()
            message = "All deliveries"

        items = [delivery_info(d) for d in deliveries]
        return DeliveryListResponse(
            success=True,
            message=message,
            deliveries=items,
            count=len(items),
            total_distance=sum(d.distance for d in items)
        )
