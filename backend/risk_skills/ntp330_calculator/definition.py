"""
NTP 330 Calculator - Data Definitions

Pydantic models and ordinal scales for the NTP 330 risk level method.
NR = ND x NE x NC, classified into four intervention tiers.
"""

from enum import Enum
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field


class SeverityTier(str, Enum):
    """
    Niveles de intervención NTP 330, del más al menos severo.

    - I: Situación crítica, corrección urgente
    - II: Corregir y adoptar medidas de control
    - III: Mejorar si es posible
    - IV: Mantener las medidas existentes
    """
    I = "I"
    II = "II"
    III = "III"
    IV = "IV"

    @property
    def label(self) -> str:
        return TIER_LABELS[self]

    @property
    def priority(self) -> int:
        return TIER_PRIORITIES[self]


TIER_LABELS: Dict[SeverityTier, str] = {
    SeverityTier.I: "critical situation",
    SeverityTier.II: "correct and adopt measures",
    SeverityTier.III: "improve if feasible",
    SeverityTier.IV: "maintain current measures",
}

TIER_PRIORITIES: Dict[SeverityTier, int] = {
    SeverityTier.I: 1,
    SeverityTier.II: 2,
    SeverityTier.III: 3,
    SeverityTier.IV: 4,
}


# Ordinal scales (value -> meaning)
DEFICIENCY_LEVELS: Dict[int, str] = {
    10: "very deficient",
    6: "deficient",
    2: "improvable",
}

EXPOSURE_LEVELS: Dict[int, str] = {
    4: "continuous",
    3: "frequent",
    2: "occasional",
    1: "sporadic",
}

CONSEQUENCE_LEVELS: Dict[int, str] = {
    100: "fatal",
    60: "very serious",
    25: "serious",
    10: "minor",
}


class RiskInterpretation(BaseModel):
    """Clasificación de un nivel de riesgo: tier, etiqueta y prioridad."""

    model_config = ConfigDict(frozen=True)

    tier: SeverityTier = Field(
        ...,
        description="Nivel de intervención: I, II, III, IV."
    )

    label: str = Field(
        ...,
        description="Texto de interpretación del nivel."
    )

    priority: int = Field(
        ...,
        ge=1,
        le=4,
        description="Prioridad numérica (1 = más severo)."
    )

    @classmethod
    def for_tier(cls, tier: SeverityTier) -> "RiskInterpretation":
        return cls(tier=tier, label=tier.label, priority=tier.priority)


class RiskEvaluation(BaseModel):
    """Resultado completo de evaluar ND, NE y NC."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, description="Nivel de riesgo NR.")
    interpretation: RiskInterpretation

    def to_summary(self) -> str:
        """Genera un resumen de una línea para mostrar al usuario."""
        return (
            f"NR {self.score} | Level {self.interpretation.tier.value} - "
            f"{self.interpretation.label}"
        )
