"""
Routes module - contains all API route handlers
"""

from .projects import router as projects_router

__all__ = [
    "projects_router",
]
