"""Runtime configuration for the KML to CSV converter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


KML_NAMESPACE = "http://www.opengis.net/kml/2.2"


@dataclass(frozen=True)
class StoragePaths:
    """Collection of filesystem paths used by the application."""

    uploads: Path
    outputs: Path

    def ensure(self) -> None:
        """Ensure the backing directories exist."""
        self.uploads.mkdir(parents=True, exist_ok=True)
        self.outputs.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AppConfig:
    """High level runtime configuration values."""

    max_upload_mb: int = 50
    allowed_extensions: tuple[str, ...] = ("kml", "kmz")
    secret_key: str = ""

    @property
    def max_upload_bytes(self) -> int:
        """Maximum upload payload in bytes."""
        return self.max_upload_mb * 1024 * 1024


@dataclass(frozen=True)
class CrossReferenceConfig:
    """Field names used to derive the cross-reference column.

    Placemarks carrying both ``source_key`` and ``target_key`` define the
    lookup; every row then resolves its ``lookup_key`` value through it and
    stores the result under ``output_key``.
    """

    source_key: str = "FAT_ID_NETWORK_ID"
    target_key: str = "Pole_ID__New_"
    lookup_key: str = "FAT_CODE"
    output_key: str = "POLE_FAT"


@dataclass(frozen=True)
class ExtractionConfig:
    """Rules applied while flattening placemarks into rows."""

    excluded_keys: frozenset[str] = frozenset(
        {"HPTAR_ID", "OBJECTID", "Shape_Length", "Shape_Area"}
    )
    hidden_columns: tuple[str, ...] = ("Name", "Latitude", "Longitude")
    namespace: str = KML_NAMESPACE
    decimal_places: int = 6


@dataclass(frozen=True)
class QueueConfig:
    """Configuration for the Redis-backed task queue."""

    redis_url: str = "redis://localhost:6379/0"
    queue_name: str = "kml-csv"
    default_timeout: int = 60 * 10  # seconds


APP_CONFIG = AppConfig(
    max_upload_mb=int(os.environ.get("KML_CSV_MAX_UPLOAD_MB", AppConfig.max_upload_mb)),
    secret_key=os.environ.get("KML_CSV_SECRET_KEY", AppConfig.secret_key),
)
CROSS_REFERENCE_CONFIG = CrossReferenceConfig(
    source_key=os.environ.get("KML_CSV_XREF_SOURCE_KEY", CrossReferenceConfig.source_key),
    target_key=os.environ.get("KML_CSV_XREF_TARGET_KEY", CrossReferenceConfig.target_key),
)
EXTRACTION_CONFIG = ExtractionConfig()
STORAGE_PATHS = StoragePaths(
    uploads=Path(os.environ.get("KML_CSV_UPLOADS", "uploads")),
    outputs=Path(os.environ.get("KML_CSV_OUTPUTS", "outputs")),
)
QUEUE_CONFIG = QueueConfig(
    redis_url=os.environ.get("KML_CSV_REDIS_URL", QueueConfig.redis_url),
    queue_name=os.environ.get("KML_CSV_QUEUE", QueueConfig.queue_name),
    default_timeout=int(
        os.environ.get("KML_CSV_QUEUE_TIMEOUT", QueueConfig.default_timeout)
    ),
)

STORAGE_PATHS.ensure()
