# quotesync Configuration Schema
# Pydantic models for YAML configuration validation

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class RemoteConfig(BaseModel):
    """Remote endpoint settings."""

    endpoint_url: str | None = Field(
        default=None,
        description="Collection endpoint (GET/POST). None = simulated remote only.",
    )
    poll_interval_ms: int = Field(default=30_000, gt=0, description="Background sync interval in milliseconds")
    timeout_seconds: float = Field(default=10.0, gt=0, description="HTTP request timeout")
    use_fallback: bool = Field(default=True, description="Use the simulated remote when the endpoint fails")
    fallback_latency_ms: int = Field(default=500, ge=0, description="Simulated remote latency in milliseconds")

    @field_validator("endpoint_url")
    @classmethod
    def empty_url_is_none(cls, v: str | None) -> str | None:
        """Treat an empty URL as not configured."""
        if v is not None and not v.strip():
            return None
        return v


class StorageConfig(BaseModel):
    """Local replica storage settings."""

    path: str = Field(default="~/.config/quotesync/quotes.yaml", description="Local store file")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_file: str | None = Field(default=None, description="Path to log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: str | None) -> str | None:
        """Expand ~ in optional path."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class QuoteSyncConfig(BaseModel):
    """Root configuration model for quotesync."""

    remote: RemoteConfig = Field(default_factory=RemoteConfig, description="Remote endpoint settings")
    storage: StorageConfig = Field(default_factory=StorageConfig, description="Local storage settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")
