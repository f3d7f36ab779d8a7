"""Derive the exported column order from a set of rows."""

from __future__ import annotations

from typing import Iterable

from ..config import (
    CROSS_REFERENCE_CONFIG,
    EXTRACTION_CONFIG,
    CrossReferenceConfig,
    ExtractionConfig,
)
from ..core import Row, Schema


class SchemaUnifier:
    """Union the keys of all rows into a single ordered schema."""

    def __init__(
        self,
        *,
        extraction: ExtractionConfig | None = None,
        cross_reference: CrossReferenceConfig | None = None,
    ):
        self.extraction = extraction or EXTRACTION_CONFIG
        self.cross_reference = cross_reference or CROSS_REFERENCE_CONFIG

    def unify(self, rows: Iterable[Row]) -> Schema:
        # dict keeps first-seen order across rows, then keys within a row.
        seen: dict[str, None] = {}
        for row in rows:
            seen.update(dict.fromkeys(row))
        columns = list(seen)

        lookup_key = self.cross_reference.lookup_key
        output_key = self.cross_reference.output_key
        if lookup_key in columns and output_key in columns:
            columns.remove(output_key)
            columns.insert(columns.index(lookup_key) + 1, output_key)

        hidden = set(self.extraction.hidden_columns)
        return tuple(column for column in columns if column not in hidden)
