"""Unit tests for configuration module."""

from __future__ import annotations

from pathlib import Path

import pytest

from indexed_table.infrastructure.config import (
    BenchmarkConfig,
    Config,
    ServerConfig,
    StorageConfig,
    get_config,
)


@pytest.mark.unit
class TestConfig:
    """Tests for Config class."""

    def test_default_config(self) -> None:
        """Test default configuration values."""
        config = Config()

        assert config.storage.data_dir == Path("./data")
        assert config.storage.file_suffix == ".txt"
        assert config.storage.encoding == "utf-8"
        assert config.server.port == 8000
        assert config.server.metrics_port == 8001
        assert config.observability.log_level == "INFO"
        assert config.observability.otel_service_name == "indexed_table"
        assert config.benchmark.num_rows == 1000
        assert config.benchmark.seed is None

    def test_table_path(self, temp_dir: Path) -> None:
        """Table names resolve under the data directory with the suffix."""
        config = Config(storage=StorageConfig(data_dir=temp_dir, file_suffix=".csv"))
        assert config.table_path("people") == temp_dir / "people.csv"

    def test_ensure_directories(self, test_config: Config) -> None:
        """Test that ensure_directories creates the data directory."""
        assert not test_config.storage.data_dir.exists()

        test_config.ensure_directories()

        assert test_config.storage.data_dir.is_dir()

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Nested settings are read from prefixed environment variables."""
        monkeypatch.setenv("INDEXED_TABLE_STORAGE__FILE_SUFFIX", ".tbl")
        monkeypatch.setenv("INDEXED_TABLE_SERVER__PORT", "9000")

        config = Config()

        assert config.storage.file_suffix == ".tbl"
        assert config.server.port == 9000

    def test_invalid_port(self) -> None:
        with pytest.raises(ValueError):
            ServerConfig(port=0)

    def test_invalid_benchmark_rows(self) -> None:
        with pytest.raises(ValueError):
            BenchmarkConfig(num_rows=0)

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValueError):
            Config(observability={"log_level": "VERBOSE"})

    def test_get_config_cached(self) -> None:
        """get_config returns one shared instance."""
        assert get_config() is get_config()
