"""Endpoint del informe resumen."""

from fastapi import APIRouter, Depends

from risk_skills.risk_report_builder import build_report
from riskeval.api.response_builder import build_report_response
from riskeval.core.logging import get_logger
from riskeval.schemas import ReportResponse
from riskeval.services import RecordManager, get_record_manager

logger = get_logger(__name__)
router = APIRouter()


@router.get("/report", response_model=ReportResponse)
async def get_report(manager: RecordManager = Depends(get_record_manager)) -> ReportResponse:
    """Contenido del informe para el renderizador PDF externo."""
    report = build_report(manager.records)
    logger.info(f"Report generated: {report.suggested_filename()}")
    return build_report_response(report)
