# app/modules/reports/__init__.py
"""
Reports module - driver workload

Architecture:
- router.py: ranking endpoints
- service.py: ranking responses built on the order service reports
- schemas.py: response models
"""

from .router import router
from .service import ReportsService

__all__ = [
    "router",
    "ReportsService"
]
