"""
Risk Record Sorter - Data Definitions

Sort criteria and the minimal record shape the sorter relies on.
"""

from enum import Enum
from typing import Protocol, runtime_checkable


class SortCriterion(str, Enum):
    """Criterios de ordenamiento de la tabla de riesgos."""
    PRIORITY = "priority"
    SCORE = "score"
    NAME = "name"
    AREA = "area"


DEFAULT_CRITERION = SortCriterion.PRIORITY


@runtime_checkable
class PriorityLike(Protocol):
    priority: int


@runtime_checkable
class SortableRecord(Protocol):
    """
    Protocol describing what the sorter reads from a record.

    Any object exposing these attributes can be sorted, including
    the persisted RiskRecord model.
    """

    name: str
    area: str
    risk_score: int
    severity: PriorityLike
