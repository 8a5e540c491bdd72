"""
Risk Report Builder Skill

Summary report content for evaluated risks.
"""

from .definition import (
    REPORT_METHODOLOGY,
    REPORT_TITLE,
    TIER_SUMMARY_LABELS,
    EmptyReportError,
    ReportBuilderError,
    ReportDetail,
    ReportRow,
    RiskReport,
    TierCount,
)

from .impl import build_report

__all__ = [
    # Models
    "ReportDetail",
    "ReportRow",
    "RiskReport",
    "TierCount",
    # Exceptions
    "EmptyReportError",
    "ReportBuilderError",
    # Functions
    "build_report",
    # Constants
    "REPORT_METHODOLOGY",
    "REPORT_TITLE",
    "TIER_SUMMARY_LABELS",
]
