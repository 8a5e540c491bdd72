from risk_skills.risk_form_validator import RiskFormInput
from riskeval.schemas.records import RiskRecord, format_display_date
from riskeval.schemas.responses import (
    EditCursorResponse,
    EditFormResponse,
    OperationResponse,
    RecordListResponse,
    ReportResponse,
    SubmissionResponse,
    TierCountResponse,
)

__all__ = [
    "EditCursorResponse",
    "EditFormResponse",
    "OperationResponse",
    "RecordListResponse",
    "ReportResponse",
    "RiskFormInput",
    "RiskRecord",
    "SubmissionResponse",
    "TierCountResponse",
    "format_display_date",
]
