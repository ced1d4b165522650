# app/modules/reports/router.py
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.config.database import get_db
from .service import ReportsService
from .schemas import DriverRankResponse

router = APIRouter()

@router.get("/drivers/rank", response_model=DriverRankResponse)
async def get_driver_rank_report(db: Session = Depends(get_db)):
    """
    Driver ranking

    **Includes:**
    - Every registered driver with their total distance
    - Sorted from most to least distance covered
    """
    service = ReportsService(db)
    return await service.get_driver_rank_report()

@router.get("/drivers/rank/{city_name}", response_model=DriverRankResponse)
async def get_driver_rank_report_by_city(
    city_name: str = Path(..., description="Registered city name"),
    db: Session = Depends(get_db)
):
    """
    Driver ranking for one city

    Same ordering as the global ranking, restricted to drivers of the city.
    Unknown cities return 404.
    """
    service = ReportsService(db)
    return await service.get_driver_rank_report_by_city(city_name)

@router.get("/health")
async def reports_health():
    """Health check for the reports module"""
    return {
        "service": "reports",
        "status": "healthy",
        "version": "1.0.0",
        "features": [
            "Global driver ranking",
            "Driver ranking by city"
        ]
    }
