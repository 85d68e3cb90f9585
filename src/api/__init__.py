"""
API Package
"""

from .routes.filters import router as filters_router

__all__ = [
    "filters_router",
]
