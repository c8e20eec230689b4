"""
API Package - FastAPI Route Modules

Organized API endpoints for the PlotPad application.
"""

from .sheets import router as sheets_router
from .charts import router as charts_router

__all__ = ['sheets_router', 'charts_router']
