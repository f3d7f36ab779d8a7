"""Service layer exports."""

from .kml_loader import KmlDocument, KmlLoader, KmlPlacemark, read_kml_text
from .cross_reference import CrossReferenceBuilder
from .row_extractor import RowExtractor
from .schema import SchemaUnifier
from .csv_exporter import CsvSerializer
from .preview import render_preview

__all__ = [
    "KmlDocument",
    "KmlLoader",
    "KmlPlacemark",
    "read_kml_text",
    "CrossReferenceBuilder",
    "RowExtractor",
    "SchemaUnifier",
    "CsvSerializer",
    "render_preview",
]
