"""Processing pipeline orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from ..core import ParsedDataset, PlacemarkElement
from ..services import (
    CrossReferenceBuilder,
    CsvSerializer,
    KmlLoader,
    RowExtractor,
    SchemaUnifier,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConversionPipeline:
    """Turns a KML/KMZ payload into a :class:`ParsedDataset`.

    Conversion runs in two ordered stages: the cross-reference map is built
    from every placemark first, then each placemark is flattened into a row
    that consults the finished map.
    """

    loader: KmlLoader
    cross_reference: CrossReferenceBuilder
    extractor: RowExtractor
    unifier: SchemaUnifier
    serializer: CsvSerializer

    def run(self, filename: str, payload: bytes) -> ParsedDataset:
        logger.info("Converting %s (%s bytes)", filename, len(payload))
        document = self.loader.load_bytes(filename, payload)
        return self.convert(document.placemarks(), source_name=filename)

    def run_path(self, path: Path | str) -> ParsedDataset:
        path = Path(path)
        return self.run(path.name, path.read_bytes())

    def convert(
        self, placemarks: Sequence[PlacemarkElement], *, source_name: str = ""
    ) -> ParsedDataset:
        logger.info("Found %s placemarks", len(placemarks))
        xref = self.cross_reference.build(placemarks)
        rows = self.extractor.extract_all(placemarks, xref)
        schema = self.unifier.unify(rows)
        logger.info("Extracted %s rows across %s columns", len(rows), len(schema))
        return ParsedDataset(schema=schema, rows=tuple(rows), source_name=source_name)

    def to_csv(self, dataset: ParsedDataset) -> str:
        return self.serializer.serialize(dataset.schema, dataset.rows)

    @classmethod
    def default(cls) -> "ConversionPipeline":
        return cls(
            loader=KmlLoader(),
            cross_reference=CrossReferenceBuilder(),
            extractor=RowExtractor(),
            unifier=SchemaUnifier(),
            serializer=CsvSerializer(),
        )
