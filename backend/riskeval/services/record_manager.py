"""
Record lifecycle orchestration.

RecordManager owns the live record collection, the active sort criterion
and the edit cursor. Every mutation goes through its methods and follows
the same rule: persist first, then apply in memory. A reported success
therefore always means the persisted and in-memory views agree, and a
StorageFailure leaves the in-memory view matching what is persisted.

Example:
    manager = RecordManager(store)
    manager.load()
    result = manager.submit({"name": "Falling objects", "area": "Warehouse",
                             "deficiencyLevel": 6, "exposureLevel": 3,
                             "consequenceLevel": 25})
    result.record.risk_score  # 450
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from risk_skills.risk_form_validator import validate
from risk_skills.risk_record_sorter import DEFAULT_CRITERION, SortCriterion, sort_records
from riskeval.core.exceptions import StorageFailure
from riskeval.core.logging import RecordLogger
from riskeval.schemas.records import RiskRecord
from riskeval.services.record_store import RecordStore


@dataclass(frozen=True)
class SubmissionResult:
    """
    Outcome of RecordManager.submit().

    Attributes:
        ok: True when the record was persisted.
        errors: Validation errors (empty when ok).
        record: The saved record (None when not ok).
        updated: True when an existing record was replaced.
    """

    ok: bool
    errors: list[str] = field(default_factory=list)
    record: Optional[RiskRecord] = None
    updated: bool = False


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _criterion_name(criterion: Any) -> str:
    if isinstance(criterion, SortCriterion):
        return criterion.value
    return str(criterion)


class RecordManager:
    """
    Orquestador del ciclo de vida de las evaluaciones.

    Composes the validator, the calculator (through RiskRecord), the
    sorter and the store. One instance per session; all edit and delete
    addressing is by record id, never by display position.

    Attributes:
        _records: Live collection, kept in the active sort order.
        _criterion: Active sort criterion.
        _editing_id: Id under edition, or None.
    """

    def __init__(
        self,
        store: RecordStore,
        criterion: str = DEFAULT_CRITERION.value,
        clock: Callable[[], int] = _now_millis,
        logger: Optional[RecordLogger] = None,
    ) -> None:
        """
        Initialize the manager with an empty collection.

        Args:
            store: Persistence gateway.
            criterion: Initial sort criterion.
            clock: Millisecond clock used to derive new ids.
            logger: Lifecycle logger (a default one is created if None).
        """
        self._store = store
        self._criterion = _criterion_name(criterion)
        self._clock = clock
        self._logger = logger or RecordLogger("manager")
        self._records: list[RiskRecord] = []
        self._editing_id: Optional[int] = None

    # -------------------------------------------------------------------------
    # Read accessors
    # -------------------------------------------------------------------------

    @property
    def records(self) -> tuple[RiskRecord, ...]:
        """Snapshot of the collection in the active order."""
        return tuple(self._records)

    @property
    def sort_criterion(self) -> str:
        return self._criterion

    @property
    def edit_cursor(self) -> Optional[int]:
        return self._editing_id

    @property
    def store(self) -> RecordStore:
        return self._store

    def __len__(self) -> int:
        return len(self._records)

    def get(self, record_id: int) -> Optional[RiskRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Reemplaza la colección en memoria por lo persistido, ordenado."""
        self._records = sort_records(self._store.load_all(), self._criterion)
        self._editing_id = None
        self._logger.loaded(len(self._records))

    def _next_id(self) -> int:
        """Time-derived id, bumped past every existing id."""
        candidate = self._clock()
        if self._records:
            candidate = max(candidate, max(r.id for r in self._records) + 1)
        return max(candidate, 1)

    def submit(self, raw: Any) -> SubmissionResult:
        """
        Validate, score and persist a form submission.

        Creates a record when no edit cursor is active, otherwise replaces
        the record under the cursor (same id, same creation date).

        Returns:
            SubmissionResult; not ok with the error list on invalid input.

        Raises:
            StorageFailure: If the write is rejected. Nothing changes in
                memory and the edit cursor is kept.
        """
        verdict = validate(raw)
        if not verdict.is_valid:
            self._logger.validation_rejected(verdict.errors)
            return SubmissionResult(ok=False, errors=verdict.errors)

        previous = self.get(self._editing_id) if self._editing_id is not None else None
        if self._editing_id is not None and previous is None:
            self._logger.warning(f"Edit cursor pointed to missing id={self._editing_id}, creating a new record")
            self._editing_id = None

        if previous is not None:
            record = RiskRecord.build(previous.id, verdict.cleaned, created_date=previous.created_date)
        else:
            record = RiskRecord.build(self._next_id(), verdict.cleaned)

        try:
            self._store.save(record)
        except StorageFailure as e:
            self._logger.error("save", e)
            raise

        if previous is not None:
            self._records = [record if r.id == record.id else r for r in self._records]
        else:
            self._records.append(record)

        self._editing_id = None
        self._apply_sort()
        self._logger.saved(record.id, record.risk_score, record.severity.tier.value, updated=previous is not None)
        return SubmissionResult(ok=True, record=record, updated=previous is not None)

    def begin_edit(self, record_id: int) -> Optional[dict]:
        """
        Point the edit cursor at a record and return its form values.

        Unknown ids are ignored: returns None and the cursor is unchanged.
        """
        record = self.get(record_id)
        if record is None:
            return None
        self._editing_id = record_id
        self._logger.edit_started(record_id)
        return record.to_form_values()

    def cancel_edit(self) -> None:
        self._editing_id = None
        self._logger.edit_reset()

    def remove(self, record_id: int) -> None:
        """
        Delete a record by id.

        Raises:
            StorageFailure: The collection is left unchanged.
        """
        try:
            self._store.delete(record_id)
        except StorageFailure as e:
            self._logger.error("remove", e)
            raise

        self._records = [r for r in self._records if r.id != record_id]
        self._editing_id = None
        self._apply_sort()
        self._logger.removed(record_id)

    def clear_all(self) -> None:
        """
        Delete every record.

        On a partial failure the keys already removed are written back so
        the persisted set matches the untouched in-memory collection, then
        the failure is re-raised. If that rollback also fails, the records
        whose keys are gone are dropped from memory instead.

        Raises:
            StorageFailure: From the bulk delete.
        """
        snapshot = list(self._records)
        try:
            self._store.delete_all(snapshot)
        except StorageFailure as e:
            self._logger.error("clear_all", e)
            self._rollback_partial_clear(snapshot, e.removed_ids)
            raise

        self._records = []
        self._editing_id = None
        self._logger.cleared(len(snapshot))

    def _rollback_partial_clear(self, snapshot: list[RiskRecord], removed_ids: list[int]) -> None:
        lost: set[int] = set()
        for record in snapshot:
            if record.id not in removed_ids:
                continue
            try:
                self._store.save(record)
            except StorageFailure as e:
                self._logger.error("rollback", e)
                lost.add(record.id)

        if lost:
            self._records = [r for r in self._records if r.id not in lost]
            if self._editing_id in lost:
                self._editing_id = None
            self._logger.warning(
                f"Rollback incomplete, dropped {len(lost)} record(s) from memory to match storage"
            )

    def re_sort(self, criterion: str) -> None:
        """Set the active criterion and reorder. Unknown criteria keep the order."""
        self._criterion = _criterion_name(criterion)
        self._apply_sort()

    def _apply_sort(self) -> None:
        self._records = sort_records(self._records, self._criterion)
        self._logger.sorted(self._criterion, len(self._records))
