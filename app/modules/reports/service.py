# app/modules/reports/service.py
from typing import List
from sqlalchemy.orm import Session

from app.modules.registry.service import RegistryService
from app.modules.delivery.order_service import DriverDistance
from app.modules.delivery.service import build_order_service
from .schemas import DriverDistanceInfo, DriverRankResponse

def ranking_info(ranking: List[DriverDistance]) -> List[DriverDistanceInfo]:
    return [
        DriverDistanceInfo(
            rank=position,
            driver_id=entry.driver_id,
            driver_name=entry.driver_name,
            city_name=entry.city_name,
            total_distance=entry.total_distance
        )
        for position, entry in enumerate(ranking, start=1)
    ]


class ReportsService:
    def __init__(self, db: Session):
        self.db = db
        self.order_service = build_order_service(db)

    async def get_driver_rank_report(self) -> DriverRankResponse:
        """All drivers ordered by total distance covered, highest first"""
        ranking = ranking_info(self.order_service.get_driver_rank_report())

        return DriverRankResponse(
            success=True,
            message="Driver ranking by total distance",
            ranking=ranking,
            count=len(ranking)
        )

    async def get_driver_rank_report_by_city(self, city_name: str) -> DriverRankResponse:
        city = RegistryService(self.db).get_city_or_404(city_name)
        ranking = ranking_info(self.order_service.get_driver_rank_report_by_city(city))

        return DriverRankResponse(
            success=True,
            message=f"Driver ranking by total distance in {city.name}",
            city=city.name,
            ranking=ranking,
            count=len(ranking)
        )
