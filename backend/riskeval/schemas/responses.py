from typing import Optional

from pydantic import BaseModel, Field

from riskeval.schemas.records import RiskRecord


class RecordListResponse(BaseModel):
    records: list[RiskRecord] = Field(default_factory=list)
    criterion: str
    count: int
    editing_id: Optional[int] = Field(default=None, description="Cursor de edición activo")


class SubmissionResponse(BaseModel):
    """Resultado de guardar una evaluación, para mostrar NR y nivel."""
    record: RiskRecord
    risk_score: int
    tier: str
    label: str
    priority: int
    updated: bool = Field(description="True si se editó un registro existente")
    summary: str


class EditFormResponse(BaseModel):
    id: int
    form: dict = Field(description="Valores para repoblar el formulario")


class EditCursorResponse(BaseModel):
    editing_id: Optional[int] = None


class OperationResponse(BaseModel):
    status: str
    message: str
    remaining: int


class TierCountResponse(BaseModel):
    tier: str
    label: str
    count: int


class ReportResponse(BaseModel):
    title: str
    generated_on: str
    total: int
    tier_counts: list[TierCountResponse]
    filename: str
    markdown: str
