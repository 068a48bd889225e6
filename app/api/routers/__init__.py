"""
app/api/routers package marker.
"""

from app.api.routers.menu_ingestion import router as menu_ingestion_router

__all__ = [
    "menu_ingestion_router",
]
