# app/modules/delivery/__init__.py
"""
Delivery module - order placement and driver assignment

Architecture:
- order_service.py: driver selection, distance bookkeeping, driver ranking
- distance.py: pluggable distance functions
- locks.py: per-city locks around driver assignment
- service.py: HTTP-facing service, maps rejections to status codes
- repository.py: delivery persistence
- router.py / schemas.py: endpoints and request/response models
"""

from .router import router
from .order_service import OrderService, OrderRejectedError, RejectionReason, DriverDistance
from .service import DeliveryService
from .repository import DeliveryRepository

__all__ = [
    "router",
    "OrderService",
    "OrderRejectedError",
    "RejectionReason",
    "DriverDistance",
    "DeliveryService",
    "DeliveryRepository"
]
