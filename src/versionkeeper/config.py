"""Configuration loading and Pydantic models for versionkeeper."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


class VersioningConfig(BaseModel):
    """Version identifier configuration.

    The replication group id is folded into every generated version id and
    into the reserved sentinel id used for legacy null versions.
    """

    replication_group_id: str = "RG001"


class MetadataConfig(BaseModel):
    """Metadata store configuration."""

    engine: str = "memory"
    sqlite_path: str = "./data/versions.db"


class LoggingConfig(BaseModel):
    """Log level and output format."""

    level: str = "INFO"
    format: str = "text"


class ObservabilityConfig(BaseModel):
    """Prometheus metrics toggle."""

    metrics: bool = True


class VersionKeeperConfig(BaseModel):
    """Top-level versionkeeper configuration."""

    versioning: VersioningConfig = Field(default_factory=VersioningConfig)
    metadata: MetadataConfig = Field(default_factory=MetadataConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


def _parse_versioning(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the versioning section from YAML data into a dict for Pydantic."""
    if data is None:
        return {}
    return {"replication_group_id": str(data.get("replication_group_id", "RG001"))}


def _parse_metadata(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the metadata section from YAML data.

    Handles nested structure: metadata.sqlite.path -> sqlite_path
    """
    if data is None:
        return {}
    result: dict[str, Any] = {"engine": data.get("engine", "memory")}
    sqlite_section = data.get("sqlite")
    if isinstance(sqlite_section, dict):
        result["sqlite_path"] = sqlite_section.get("path", "./data/versions.db")
    return result


def _parse_logging(data: dict[str, Any] | None) -> dict[str, Any]:
    """Parse the logging section from YAML data."""
    if data is None:
        return {}
    return {
        "level": data.get("level", "INFO"),
        "format": data.get("format", "text"),
    }


def _parse_observability(data: dict[str, Any] | None) -> dict[str, Any]:
    if data is None:
        return {}
    return {"metrics": data.get("metrics", True)}


def load_config(path: Path) -> VersionKeeperConfig:
    """Load a VersionKeeperConfig from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        A fully populated VersionKeeperConfig validated by Pydantic.

    Raises:
        FileNotFoundError: If the config file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
    """
    with open(path, "r") as fh:
        raw: dict[str, Any] = yaml.safe_load(fh) or {}

    return VersionKeeperConfig(
        versioning=VersioningConfig(**_parse_versioning(raw.get("versioning"))),
        metadata=MetadataConfig(**_parse_metadata(raw.get("metadata"))),
        logging=LoggingConfig(**_parse_logging(raw.get("logging"))),
        observability=ObservabilityConfig(**_parse_observability(raw.get("observability"))),
    )
