# app/api/v1/router.py
from fastapi import APIRouter
from app.modules.registry.router import router as registry_router
from app.modules.delivery.router import router as delivery_router
from app.modules.reports.router import router as reports_router

# Main router for API v1
api_router = APIRouter()

api_router.include_router(
    registry_router,
    prefix="/registry",
    tags=["Registry"]
)

api_router.include_router(
    delivery_router,
    prefix="/deliveries",
    tags=["Deliveries"]
)

api_router.include_router(
    reports_router,
    prefix="/reports",
    tags=["Reports"]
)

@api_router.get("/")
async def api_root():
    """API v1 root"""
    return {
        "message": "Walt Delivery API v1",
        "status": "active",
        "docs": "/docs",
        "available_endpoints": {
            "registry": "/api/v1/registry",
            "deliveries": "/api/v1/deliveries",
            "reports": "/api/v1/reports"
        }
    }

@api_router.get("/modules")
async def list_modules():
    """Available modules"""
    return {
        "success": True,
        "modules": [
            {
                "name": "registry",
                "prefix": "/registry",
                "description": "Cities, customers, restaurants and drivers",
                "status": "implemented"
            },
            {
                "name": "deliveries",
                "prefix": "/deliveries",
                "description": "Order placement and driver assignment",
                "status": "implemented"
            },
            {
                "name": "reports",
                "prefix": "/reports",
                "description": "Driver ranking by distance covered",
                "status": "implemented"
            }
        ]
    }
