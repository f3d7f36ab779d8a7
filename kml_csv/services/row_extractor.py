"""Flatten placemarks into tabular rows."""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator

from bs4 import BeautifulSoup

from ..config import (
    CROSS_REFERENCE_CONFIG,
    EXTRACTION_CONFIG,
    CrossReferenceConfig,
    ExtractionConfig,
)
from ..core import CrossReferenceMap, PlacemarkElement, Row, freeze_row
from ..utils import format_decimal, parse_float

logger = logging.getLogger(__name__)

_TABLE_CELL = re.compile(r"<td[\s>]", re.IGNORECASE)


def description_pairs(markup: str | None) -> Iterator[tuple[str, str]]:
    """Yield ``(key, value)`` pairs from the ``td`` cells of ``markup``.

    Cells are read two at a time; a trailing unpaired cell is dropped.
    Markup without table cells yields nothing.
    """

    if not markup or not _TABLE_CELL.search(markup):
        return
    soup = BeautifulSoup(markup, "html.parser")
    cells = [cell.get_text().strip() for cell in soup.find_all("td")]
    if len(cells) % 2:
        logger.debug("Dropping unpaired description cell %r", cells[-1])
    for index in range(0, len(cells) - 1, 2):
        yield cells[index], cells[index + 1]


def split_coordinates(text: str | None, places: int = 6) -> tuple[str, str]:
    """Return ``(latitude, longitude)`` strings from a ``lon,lat[,alt]`` tuple.

    Only the first two comma separated fields are read, each up to its
    numeric prefix, so any further tuples are ignored. Missing or
    unparsable components come back as empty strings.
    """

    parts = [part.strip() for part in (text or "").split(",")[:2]]

    def component(index: int) -> str:
        if index >= len(parts):
            return ""
        value = parse_float(parts[index])
        return "" if value is None else format_decimal(value, places)

    return component(1), component(0)


class RowExtractor:
    """Merge the attribute sources of a placemark into a single row."""

    def __init__(
        self,
        *,
        extraction: ExtractionConfig | None = None,
        cross_reference: CrossReferenceConfig | None = None,
    ):
        self.extraction = extraction or EXTRACTION_CONFIG
        self.cross_reference = cross_reference or CROSS_REFERENCE_CONFIG

    def extract(self, placemark: PlacemarkElement, xref: CrossReferenceMap) -> Row:
        latitude, longitude = split_coordinates(
            placemark.coordinate_text(), self.extraction.decimal_places
        )
        values: dict[str, str] = {"Latitude": latitude, "Longitude": longitude}

        # Description cells are merged last so they win on key collisions.
        self._merge(values, placemark.extended_data())
        self._merge(values, description_pairs(placemark.description_html()))

        lookup_value = values.get(self.cross_reference.lookup_key, "")
        values[self.cross_reference.output_key] = xref.get(lookup_value, "")
        return freeze_row(values)

    def extract_all(
        self, placemarks: Iterable[PlacemarkElement], xref: CrossReferenceMap
    ) -> list[Row]:
        return [self.extract(placemark, xref) for placemark in placemarks]

    def _merge(self, values: dict[str, str], pairs: Iterable[tuple[str, str]]) -> None:
        for key, value in pairs:
            if key in self.extraction.excluded_keys:
                continue
            values[key] = value.strip()
