"""Pytest configuration and fixtures for indexed_table tests."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Generator

import pytest
from prometheus_client import CollectorRegistry

from indexed_table.domain.entities import Record
from indexed_table.domain.services import Table
from indexed_table.infrastructure.config import Config, StorageConfig
from indexed_table.infrastructure.metrics import MetricsRegistry

PEOPLE_COLUMNS = ("lastname", "firstname", "score")

PEOPLE_ROWS = [
    ("Smith", "Ann", "20"),
    ("Smith", "Bob", "35"),
    ("Jones", "Cat", "20"),
    ("Brown", "Dan", "9"),
    ("Jones", "Eve", "10"),
]


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_config(temp_dir: Path) -> Config:
    """Provide a test configuration with a temporary data directory."""
    return Config(storage=StorageConfig(data_dir=temp_dir / "data"))


@pytest.fixture
def metrics_registry() -> MetricsRegistry:
    """Provide a fresh metrics registry for each test."""
    # Use a separate registry to avoid conflicts between tests
    registry = CollectorRegistry(auto_describe=True)
    return MetricsRegistry(registry=registry)


@pytest.fixture
def people() -> list[Record]:
    """Sample records, including repeated values in every column."""
    return [Record(PEOPLE_COLUMNS, row) for row in PEOPLE_ROWS]


@pytest.fixture
def people_table(people: list[Record]) -> Table:
    """An unindexed table holding the sample records."""
    return Table.from_records(PEOPLE_COLUMNS, people)


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "benchmark: Performance benchmarks")
