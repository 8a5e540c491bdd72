"""
Risk Report Builder - Data Definitions

Report content handed to the document renderer: a tier-count summary,
one table row and one detail block per evaluated risk.
"""

from typing import List, Protocol

from pydantic import BaseModel, Field

from risk_skills.ntp330_calculator import RiskInterpretation, SeverityTier


REPORT_TITLE = "Risk Assessment Report"
REPORT_METHODOLOGY = "NTP 330 methodology - INSHT"

# Etiquetas cortas del resumen ejecutivo
TIER_SUMMARY_LABELS = {
    SeverityTier.I: "Critical",
    SeverityTier.II: "High",
    SeverityTier.III: "Medium",
    SeverityTier.IV: "Low",
}


class ReportableRecord(Protocol):
    """Campos de un registro que el informe necesita."""

    name: str
    area: str
    description: str
    mitigations: str
    deficiency_level: int
    exposure_level: int
    consequence_level: int
    risk_score: int
    severity: RiskInterpretation


class TierCount(BaseModel):
    """Cantidad de riesgos en un nivel."""

    tier: SeverityTier
    label: str = Field(description="Etiqueta corta: Critical, High, Medium, Low.")
    count: int = Field(ge=0)


class ReportRow(BaseModel):
    """Fila de la tabla de riesgos."""

    name: str
    area: str
    calculation: str = Field(description="ND×NE×NC")
    risk_score: int
    tier: SeverityTier
    interpretation: str


class ReportDetail(BaseModel):
    """Bloque de detalle por riesgo."""

    index: int = Field(ge=1)
    name: str
    area: str
    risk_score: int
    tier: SeverityTier
    interpretation: str
    description: str = ""
    mitigations: str = ""


class RiskReport(BaseModel):
    """
    Contenido completo del informe.

    Rendering to PDF is left to an external renderer; `to_report()`
    gives a Markdown rendition.
    """

    title: str = REPORT_TITLE
    methodology: str = REPORT_METHODOLOGY
    generated_on: str = Field(description="Fecha de generación (d/m/aaaa).")
    generated_iso: str = Field(description="Fecha ISO para el nombre de archivo.")
    total: int = Field(ge=1)
    tier_counts: List[TierCount]
    rows: List[ReportRow]
    details: List[ReportDetail]

    def count_for(self, tier: SeverityTier) -> int:
        for tc in self.tier_counts:
            if tc.tier == tier:
                return tc.count
        return 0

    def suggested_filename(self) -> str:
        return f"Informe_Riesgos_NTP330_{self.generated_iso}.pdf"

    def to_report(self) -> str:
        """Genera el informe en Markdown."""
        lines = [
            f"# {self.title}",
            f"",
            f"{self.methodology} | Date: {self.generated_on}",
            f"",
            "## Executive Summary",
            f"",
            f"Total risks evaluated: {self.total}",
        ]
        for tc in self.tier_counts:
            lines.append(f"- Level {tc.tier.value} ({tc.label}): {tc.count}")
        lines.append("")

        lines.append("| Risk | Area | Calculation | NR | Level | Interpretation |")
        lines.append("|------|------|-------------|----|-------|----------------|")
        for row in self.rows:
            lines.append(
                f"| {row.name} | {row.area} | {row.calculation} | {row.risk_score} | "
                f"Level {row.tier.value} | {row.interpretation} |"
            )
        lines.append("")

        for d in self.details:
            lines.append(f"### {d.index}. {d.name}")
            lines.append(f"")
            lines.append(f"Area: {d.area}")
            lines.append(f"")
            lines.append(f"Risk level: {d.risk_score} - Level {d.tier.value} ({d.interpretation})")
            if d.description:
                lines.extend(["", "Description:", d.description])
            if d.mitigations:
                lines.extend(["", "Preventive measures:", d.mitigations])
            lines.append("")

        return "\n".join(lines)


# Custom Exceptions

class ReportBuilderError(Exception):
    """Excepción base para errores del generador de informes."""
    pass


class EmptyReportError(ReportBuilderError):
    """No hay riesgos para generar el informe."""
    def __init__(self):
        super().__init__("There are no risks to include in the report")
