"""
Risk Record Sorter - Implementation

Ordering policy for the record table. Always returns a new list;
Python's sort is stable so equal keys keep their previous relative order.
"""

import logging
import unicodedata
from typing import Callable, Dict, Iterable, List, Optional, TypeVar, Union

from .definition import DEFAULT_CRITERION, SortableRecord, SortCriterion

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=SortableRecord)


def collation_key(text: str) -> str:
    """
    Locale-aware comparison key: accents and case do not affect order.

    "Área" sorts next to "area", "Ñandú" after "Nube".
    """
    composed = unicodedata.normalize("NFC", text)
    # n with tilde is a letter of its own in Spanish, sorted right after n
    composed = composed.replace("ñ", "n\uffff").replace("Ñ", "N\uffff")
    decomposed = unicodedata.normalize("NFD", composed)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


_SORT_KEYS: Dict[SortCriterion, Callable[[SortableRecord], object]] = {
    SortCriterion.PRIORITY: lambda r: (r.severity.priority, -r.risk_score),
    SortCriterion.SCORE: lambda r: -r.risk_score,
    SortCriterion.NAME: lambda r: collation_key(r.name),
    SortCriterion.AREA: lambda r: collation_key(r.area),
}


def parse_criterion(criterion: Union[str, SortCriterion, None]) -> Optional[SortCriterion]:
    """Devuelve el SortCriterion correspondiente o None si es desconocido."""
    if criterion is None:
        return DEFAULT_CRITERION
    if isinstance(criterion, SortCriterion):
        return criterion
    try:
        return SortCriterion(str(criterion).strip().lower())
    except ValueError:
        return None


def sort_records(
    records: Iterable[R],
    criterion: Union[str, SortCriterion, None] = DEFAULT_CRITERION,
) -> List[R]:
    """
    Return a new list ordered by the given criterion.

    - priority: ascending tier priority, ties by descending score
    - score: descending score
    - name / area: ascending, accent and case insensitive

    Unknown criteria leave the input order unchanged.
    """
    items = list(records)
    parsed = parse_criterion(criterion)

    if parsed is None:
        logger.warning(f"Unknown sort criterion '{criterion}', keeping current order")
        return items

    return sorted(items, key=_SORT_KEYS[parsed])
