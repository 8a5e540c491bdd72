"""Coleccion de routers de la API."""

from riskeval.api.routes.records import router as records_router
from riskeval.api.routes.reports import router as reports_router

__all__ = ["records_router", "reports_router"]
