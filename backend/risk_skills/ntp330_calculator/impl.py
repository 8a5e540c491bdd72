"""
NTP 330 Calculator - Implementation

Deterministic risk level scoring:
- NR = ND x NE x NC
- Step classification into intervention tiers I-IV
"""

import logging
from typing import List, Tuple

from .definition import RiskEvaluation, RiskInterpretation, SeverityTier

logger = logging.getLogger(__name__)


# Lower bound (inclusive) of each tier, most severe first
TIER_THRESHOLDS: List[Tuple[int, SeverityTier]] = [
    (4000, SeverityTier.I),
    (500, SeverityTier.II),
    (150, SeverityTier.III),
]


def score(nd: int, ne: int, nc: int) -> int:
    """Nivel de riesgo NR = ND x NE x NC. Range checks belong to the validator."""
    return nd * ne * nc


def classify(risk_score: int) -> RiskInterpretation:
    """
    Classify a risk score into its intervention tier.

    Bands are inclusive on their lower bound:
    >= 4000 -> I, >= 500 -> II, >= 150 -> III, otherwise IV.
    """
    for lower_bound, tier in TIER_THRESHOLDS:
        if risk_score >= lower_bound:
            return RiskInterpretation.for_tier(tier)
    return RiskInterpretation.for_tier(SeverityTier.IV)


def evaluate(nd: int, ne: int, nc: int) -> RiskEvaluation:
    """Score and classify in one step."""
    nr = score(nd, ne, nc)
    interpretation = classify(nr)
    logger.debug(
        f"Evaluated ND={nd} NE={ne} NC={nc} -> NR={nr} "
        f"(level {interpretation.tier.value})"
    )
    return RiskEvaluation(score=nr, interpretation=interpretation)
