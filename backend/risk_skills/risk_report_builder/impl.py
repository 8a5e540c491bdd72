"""
Risk Report Builder - Implementation

Builds report content from evaluated risks:
- Tier-count executive summary
- Risk table (name, area, ND×NE×NC, NR, level)
- One detail block per risk, in the order received
"""

import logging
from datetime import date
from typing import Optional, Sequence

from risk_skills.ntp330_calculator import SeverityTier

from .definition import (
    TIER_SUMMARY_LABELS,
    EmptyReportError,
    ReportableRecord,
    ReportDetail,
    ReportRow,
    RiskReport,
    TierCount,
)

logger = logging.getLogger(__name__)


def build_report(
    records: Sequence[ReportableRecord],
    generated_on: Optional[date] = None,
) -> RiskReport:
    """
    Build the report for a sequence of records.

    Args:
        records: Records in the order they should appear.
        generated_on: Report date (defaults to today).

    Raises:
        EmptyReportError: If there are no records.
    """
    if not records:
        raise EmptyReportError()

    day = generated_on or date.today()

    counts = {tier: 0 for tier in SeverityTier}
    rows = []
    details = []

    for index, r in enumerate(records, start=1):
        tier = r.severity.tier
        counts[tier] += 1
        rows.append(ReportRow(
            name=r.name,
            area=r.area,
            calculation=f"{r.deficiency_level}×{r.exposure_level}×{r.consequence_level}",
            risk_score=r.risk_score,
            tier=tier,
            interpretation=r.severity.label,
        ))
        details.append(ReportDetail(
            index=index,
            name=r.name,
            area=r.area,
            risk_score=r.risk_score,
            tier=tier,
            interpretation=r.severity.label,
            description=r.description or "",
            mitigations=r.mitigations or "",
        ))

    tier_counts = [
        TierCount(tier=tier, label=TIER_SUMMARY_LABELS[tier], count=counts[tier])
        for tier in SeverityTier
    ]

    logger.info(
        f"Report built for {len(records)} risk(s): "
        + ", ".join(f"{tc.tier.value}={tc.count}" for tc in tier_counts)
    )

    return RiskReport(
        generated_on=f"{day.day}/{day.month}/{day.year}",
        generated_iso=day.isoformat(),
        total=len(records),
        tier_counts=tier_counts,
        rows=rows,
        details=details,
    )
