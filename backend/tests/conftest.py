"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing the NTP 330 Risk Evaluator.
All fixtures use the in-memory key-value backend, so no test touches disk
unless it asks for `tmp_path` explicitly.

Usage:
    def test_example(manager, form_input):
        result = manager.submit(form_input(name="Noise"))
        assert result.ok
"""

import os

# Settings are read at import time; force the in-memory medium for tests
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import itertools
from typing import Optional

import pytest

from riskeval.schemas import RiskRecord
from riskeval.services import (
    InMemoryKeyValueBackend,
    KeyValueBackendError,
    RecordManager,
    RecordStore,
)


TEST_PREFIX = "riesgo_"


# =============================================================================
# BACKEND FIXTURES
# =============================================================================


class FlakyBackend(InMemoryKeyValueBackend):
    """
    In-memory backend that can be told to reject writes or deletes.

    Usage:
        backend.fail_set = True            # every set() raises
        backend.fail_delete_after = 2      # the third delete() raises
    """

    def __init__(self):
        super().__init__()
        self.fail_set = False
        self.fail_delete = False
        self.fail_delete_after: Optional[int] = None
        self.deletes = 0

    def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise KeyValueBackendError("medium is read-only")
        super().set(key, value)

    def delete(self, key: str) -> None:
        if self.fail_delete:
            raise KeyValueBackendError("medium is read-only")
        if self.fail_delete_after is not None and self.deletes >= self.fail_delete_after:
            raise KeyValueBackendError("medium went away")
        self.deletes += 1
        super().delete(key)


@pytest.fixture
def backend():
    """Fresh in-memory key-value medium."""
    return InMemoryKeyValueBackend()


@pytest.fixture
def flaky_backend():
    """In-memory medium with switchable failures."""
    return FlakyBackend()


@pytest.fixture
def store(backend):
    return RecordStore(backend, prefix=TEST_PREFIX)


@pytest.fixture
def flaky_store(flaky_backend):
    return RecordStore(flaky_backend, prefix=TEST_PREFIX)


# =============================================================================
# MANAGER FIXTURES
# =============================================================================


@pytest.fixture
def clock():
    """
    Deterministic millisecond clock: 1000, 1001, 1002...

    Usage:
        def test_example(clock):
            manager = RecordManager(store, clock=clock)
    """
    counter = itertools.count(1000)
    return lambda: next(counter)


@pytest.fixture
def manager(store, clock):
    return RecordManager(store, clock=clock)


@pytest.fixture
def flaky_manager(flaky_store, clock):
    return RecordManager(flaky_store, clock=clock)


# =============================================================================
# INPUT / RECORD FACTORIES
# =============================================================================


@pytest.fixture
def form_input():
    """
    Factory fixture for raw form submissions (form-binder shape).

    Usage:
        def test_example(form_input):
            data = form_input(name="Noise", consequenceLevel=60)
    """
    def _create(**overrides):
        data = {
            "name": "Falling objects",
            "area": "Warehouse",
            "description": "Boxes stacked above head height",
            "deficiencyLevel": 6,
            "exposureLevel": 3,
            "consequenceLevel": 25,
            "mitigations": "Anchor shelving",
        }
        data.update(overrides)
        return data
    return _create


@pytest.fixture
def make_record():
    """
    Factory fixture for RiskRecord instances.

    Usage:
        def test_example(make_record):
            record = make_record(1, name="Noise", nd=2, ne=1, nc=10)
    """
    def _create(
        record_id: int,
        name: str = "Risk",
        area: str = "Plant",
        nd: int = 6,
        ne: int = 3,
        nc: int = 25,
        created_date: str = "19/10/2026",
    ) -> RiskRecord:
        return RiskRecord.build(
            record_id,
            {
                "name": name,
                "area": area,
                "deficiency_level": nd,
                "exposure_level": ne,
                "consequence_level": nc,
            },
            created_date=created_date,
        )
    return _create


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
