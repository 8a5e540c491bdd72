"""
NTP 330 Calculator Skill

Risk level (NR) scoring and intervention tier classification.
"""

from .definition import (
    CONSEQUENCE_LEVELS,
    DEFICIENCY_LEVELS,
    EXPOSURE_LEVELS,
    TIER_LABELS,
    TIER_PRIORITIES,
    RiskEvaluation,
    RiskInterpretation,
    SeverityTier,
)

from .impl import (
    TIER_THRESHOLDS,
    classify,
    evaluate,
    score,
)

__all__ = [
    # Models
    "RiskEvaluation",
    "RiskInterpretation",
    "SeverityTier",
    # Functions
    "classify",
    "evaluate",
    "score",
    # Constants
    "CONSEQUENCE_LEVELS",
    "DEFICIENCY_LEVELS",
    "EXPOSURE_LEVELS",
    "TIER_LABELS",
    "TIER_PRIORITIES",
    "TIER_THRESHOLDS",
]
