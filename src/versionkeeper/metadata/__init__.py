"""Versioned metadata store backends for versionkeeper."""

from typing import TYPE_CHECKING

from versionkeeper.metadata.store import MetadataStore

if TYPE_CHECKING:
    from versionkeeper.config import MetadataConfig
    from versionkeeper.version_id import VersionIdCodec

__all__ = [
    "create_metadata_store",
    "MetadataStore",
]


def create_metadata_store(config: "MetadataConfig", codec: "VersionIdCodec") -> MetadataStore:
    """Create a metadata store instance based on configuration.

    Args:
        config: The metadata configuration.
        codec: Codec used by the store to generate new version ids.

    Returns:
        A metadata store instance implementing the MetadataStore protocol.

    Raises:
        ValueError: If the engine is unknown.
    """
    engine = config.engine

    if engine == "memory":
        from versionkeeper.metadata.memory import MemoryMetadataStore

        return MemoryMetadataStore(codec)

    elif engine == "sqlite":
        from versionkeeper.metadata.sqlite import SQLiteMetadataStore

        return SQLiteMetadataStore(config.sqlite_path, codec)

    else:
        raise ValueError(f"Unknown metadata engine: {engine}")
