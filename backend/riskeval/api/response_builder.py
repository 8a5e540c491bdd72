"""Construccion de respuestas API desde el estado del gestor."""

from risk_skills.risk_report_builder import RiskReport
from riskeval.schemas import (
    RecordListResponse,
    ReportResponse,
    SubmissionResponse,
    TierCountResponse,
)
from riskeval.services import RecordManager, SubmissionResult


def build_list_response(manager: RecordManager) -> RecordListResponse:
    """Registros ordenados y criterio activo, para el renderizador de la tabla."""
    records = list(manager.records)
    return RecordListResponse(
        records=records,
        criterion=manager.sort_criterion,
        count=len(records),
        editing_id=manager.edit_cursor,
    )


def build_submission_response(result: SubmissionResult) -> SubmissionResponse:
    """Convierte un SubmissionResult exitoso en SubmissionResponse tipado."""
    record = result.record
    severity = record.severity
    return SubmissionResponse(
        record=record,
        risk_score=record.risk_score,
        tier=severity.tier.value,
        label=severity.label,
        priority=severity.priority,
        updated=result.updated,
        summary=f"NR {record.risk_score} | Level {severity.tier.value} - {severity.label}",
    )


def build_report_response(report: RiskReport) -> ReportResponse:
    return ReportResponse(
        title=report.title,
        generated_on=report.generated_on,
        total=report.total,
        tier_counts=[
            TierCountResponse(tier=tc.tier.value, label=tc.label, count=tc.count)
            for tc in report.tier_counts
        ],
        filename=report.suggested_filename(),
        markdown=report.to_report(),
    )
