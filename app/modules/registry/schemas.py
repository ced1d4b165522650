# app/modules/registry/schemas.py
from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime
from app.shared.schemas.common import BaseResponse

class CityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="City name")

    @validator('name')
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('City name cannot be blank')
        return v.strip()

class CityOwnedCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    city_name: str = Field(..., min_length=1, max_length=255, description="Name of a registered city")

    @validator('name', 'city_name')
    def validate_names(cls, v):
        if not v.strip():
            raise ValueError('Names cannot be blank')
        return v.strip()

class CustomerCreate(CityOwnedCreate):
    description: Optional[str] = Field("", max_length=500, description="Free-text description")

class RestaurantCreate(CityOwnedCreate):
    description: Optional[str] = Field("", max_length=500, description="Free-text description")

class DriverCreate(CityOwnedCreate):
    pass

class CityInfo(BaseModel):
    id: int
    name: str

class CustomerInfo(BaseModel):
    id: int
    name: str
    city_name: str
    description: Optional[str] = None

class RestaurantInfo(BaseModel):
    id: int
    name: str
    city_name: str
    description: Optional[str] = None

class DriverInfo(BaseModel):
    id: int
    name: str
    city_name: str
    last_start_time_delivery: Optional[datetime] = None
    total_distance: int
    busy_until: Optional[datetime] = None

class CityResponse(BaseResponse):
    city: CityInfo

class CustomerResponse(BaseResponse):
    customer: CustomerInfo

class RestaurantResponse(BaseResponse):
    restaurant: RestaurantInfo

class DriverResponse(BaseResponse):
    driver: DriverInfo

class CityListResponse(BaseResponse):
    cities: List[CityInfo]
    count: int

class CustomerListResponse(BaseResponse):
    customers: List[CustomerInfo]
    count: int

class RestaurantListResponse(BaseResponse):
    restaurants: List[RestaurantInfo]
    count: int

class DriverListResponse(BaseResponse):
    drivers: List[DriverInfo]
    count: int
