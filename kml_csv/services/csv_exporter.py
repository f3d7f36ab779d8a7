"""Render parsed datasets as CSV text."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence

from ..config import EXTRACTION_CONFIG
from ..core import ParsedDataset, Row
from ..utils import format_decimal, is_decimal_text

logger = logging.getLogger(__name__)


class CsvSerializer:
    """Serialize a schema and its rows.

    Header names are written unquoted; every data cell is quoted.
    """

    def __init__(self, *, decimal_places: int | None = None):
        self.decimal_places = (
            EXTRACTION_CONFIG.decimal_places if decimal_places is None else decimal_places
        )

    def serialize(self, schema: Sequence[str], rows: Iterable[Row]) -> str:
        lines = [",".join(schema)]
        for row in rows:
            cells = (self.format_cell(row.get(column) or "") for column in schema)
            lines.append(",".join(_quote(cell) for cell in cells))
        return "\n".join(lines)

    def format_cell(self, value: str) -> str:
        if is_decimal_text(value):
            return format_decimal(float(value), self.decimal_places)
        return value

    def export(self, dataset: ParsedDataset, output_path: Path | str) -> Path:
        output_path = Path(output_path)
        content = self.serialize(dataset.schema, dataset.rows)
        output_path.write_text(content, encoding="utf-8", newline="")
        logger.info("Wrote %s rows to %s", len(dataset.rows), output_path)
        return output_path


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'
