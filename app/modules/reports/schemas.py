# app/modules/reports/schemas.py
from pydantic import BaseModel
from typing import List, Optional
from app.shared.schemas.common import BaseResponse

class DriverDistanceInfo(BaseModel):
    rank: int
    driver_id: int
    driver_name: str
    city_name: str
    total_distance: int

class DriverRankResponse(BaseResponse):
    city: Optional[str] = None
    ranking: List[DriverDistanceInfo]
    count: int
