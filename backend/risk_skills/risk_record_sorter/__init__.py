"""
Risk Record Sorter Skill

Deterministic, stable ordering of evaluated risks for display.
"""

from .definition import (
    DEFAULT_CRITERION,
    SortableRecord,
    SortCriterion,
)

from .impl import (
    collation_key,
    parse_criterion,
    sort_records,
)

__all__ = [
    # Models
    "SortableRecord",
    "SortCriterion",
    # Functions
    "collation_key",
    "parse_criterion",
    "sort_records",
    # Constants
    "DEFAULT_CRITERION",
]
