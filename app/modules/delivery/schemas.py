# app/modules/delivery/schemas.py
from pydantic import BaseModel, Field, validator
from typing import List
from datetime import datetime
from app.shared.schemas.common import BaseResponse

class OrderCreate(BaseModel):
    customer_name: str = Field(..., min_length=1, description="Registered customer placing the order")
    restaurant_name: str = Field(..., min_length=1, description="Restaurant in the customer's city")
    delivery_time: datetime = Field(..., description="When the delivery should start")

    @validator('customer_name', 'restaurant_name')
    def validate_names(cls, v):
        if not v.strip():
            raise ValueError('Names cannot be blank')
        return v.strip()

class DeliveryInfo(BaseModel):
    id: int
    driver_id: int
    driver_name: str
    customer_name: str
    restaurant_name: str
    city_name: str
    delivery_time: datetime
    distance: int

class DeliveryResponse(BaseResponse):
    delivery: DeliveryInfo
    driver_total_distance: int

class DeliveryListResponse(BaseResponse):
    deliveries: List[DeliveryInfo]
    count: int
    total_distance: int
