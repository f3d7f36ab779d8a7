"""Cross-reference lookup built from placemark identifier pairs."""

from __future__ import annotations

import logging
from typing import Iterable

from ..config import CROSS_REFERENCE_CONFIG, CrossReferenceConfig
from ..core import CrossReferenceMap, PlacemarkElement

logger = logging.getLogger(__name__)


class CrossReferenceBuilder:
    """Map source identifiers to target identifiers across a document.

    The map must be built from every placemark before any row is extracted:
    the placemark defining a reference may appear after the one using it.
    """

    def __init__(self, config: CrossReferenceConfig | None = None):
        self.config = config or CROSS_REFERENCE_CONFIG

    def build(self, placemarks: Iterable[PlacemarkElement]) -> CrossReferenceMap:
        mapping: CrossReferenceMap = {}
        for placemark in placemarks:
            source, target = self._identifiers(placemark)
            if source and target:
                if mapping.get(source, target) != target:
                    logger.debug("Overwriting reference %s: %s -> %s", source, mapping[source], target)
                mapping[source] = target

        logger.info("Built %s cross-reference entries", len(mapping))
        return mapping

    def _identifiers(self, placemark: PlacemarkElement) -> tuple[str, str]:
        source = target = ""
        for key, value in placemark.extended_data():
            if key == self.config.source_key:
                source = value.strip()
            elif key == self.config.target_key:
                target = value.strip()
        return source, target
