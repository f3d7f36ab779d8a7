"""Domain models used throughout the converter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Protocol, Sequence

Row = Mapping[str, str]
Schema = tuple[str, ...]
CrossReferenceMap = dict[str, str]


class PlacemarkElement(Protocol):
    """Read-only view over a single placemark of a parsed document."""

    def extended_data(self) -> list[tuple[str, str]]:
        """Return the ``(name, value)`` pairs of the placemark's SimpleData."""

    def coordinate_text(self) -> str | None:
        """Return the text of the first ``coordinates`` element, if any."""

    def description_html(self) -> str | None:
        """Return the raw text of the ``description`` element, if any."""


def freeze_row(values: Mapping[str, str]) -> Row:
    """Return an immutable copy of ``values``."""

    return MappingProxyType(dict(values))


@dataclass(frozen=True, slots=True)
class ParsedDataset:
    """Schema and rows produced from one KML document."""

    schema: Schema
    rows: tuple[Row, ...]
    source_name: str = ""

    @property
    def csv_filename(self) -> str:
        """Name of the CSV export derived from the source file name."""
        stem = self.source_name.rsplit(".", 1)[0] if "." in self.source_name else self.source_name
        return f"{stem or 'export'}.csv"


@dataclass(slots=True)
class ConversionSummary:
    """Information returned to API callers after a conversion finishes."""

    conversion_id: str
    created_at: datetime
    completed_at: datetime
    source_name: str
    csv_file: str
    columns: Sequence[str]
    row_count: int
    preview_html: str = ""
    extras: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        payload = {
            "conversion_id": self.conversion_id,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat(),
            "source_name": self.source_name,
            "csv_file": self.csv_file,
            "columns": list(self.columns),
            "row_count": self.row_count,
            "preview_html": self.preview_html,
        }
        payload.update(self.extras)
        return payload
