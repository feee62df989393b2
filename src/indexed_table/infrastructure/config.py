"""Configuration management for the indexed table service."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageConfig(BaseModel):
    """Flat-file storage configuration."""

    data_dir: Path = Field(default=Path("./data"), description="Directory for table files")
    file_suffix: str = Field(default=".txt", description="Suffix appended to table names")
    encoding: str = Field(default="utf-8", description="Text encoding of table files")


class ServerConfig(BaseModel):
    """Server configuration."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="REST API port")
    metrics_port: int = Field(default=8001, ge=1, le=65535, description="Prometheus metrics port")


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Log level"
    )
    log_format: Literal["json", "console"] = Field(default="json", description="Log format")
    otel_endpoint: str | None = Field(
        default=None, description="OpenTelemetry collector endpoint"
    )
    otel_service_name: str = Field(default="indexed_table", description="Service name for tracing")


class BenchmarkConfig(BaseModel):
    """Lookup benchmark configuration."""

    num_rows: int = Field(default=1000, ge=1, description="Rows inserted before timing")
    num_lookups: int = Field(default=1000, ge=1, description="Random equality lookups per phase")
    seed: int | None = Field(default=None, description="Random seed for reproducible runs")


class Config(BaseSettings):
    """Main configuration for the indexed table service."""

    model_config = SettingsConfigDict(
        env_prefix="INDEXED_TABLE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    benchmark: BenchmarkConfig = Field(default_factory=BenchmarkConfig)

    def table_path(self, name: str) -> Path:
        """Resolve the file path for a named table."""
        return self.storage.data_dir / f"{name}{self.storage.file_suffix}"

    def ensure_directories(self) -> None:
        """Ensure the data directory exists."""
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_config() -> Config:
    """Get the global configuration instance."""
    return Config()
