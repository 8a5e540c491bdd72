from fastapi import APIRouter

from riskeval.api.routes import records_router, reports_router

router = APIRouter()
router.include_router(records_router)
router.include_router(reports_router)

__all__ = ["router"]
