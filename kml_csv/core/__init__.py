"""Core domain primitives for the converter."""

from .models import (
    ConversionSummary,
    CrossReferenceMap,
    ParsedDataset,
    PlacemarkElement,
    Row,
    Schema,
    freeze_row,
)
from .exceptions import (
    ConversionError,
    InvalidKmlError,
    MissingKmlEntryError,
    NoDataToExportError,
    UnsupportedFormatError,
)

__all__ = [
    "ConversionSummary",
    "CrossReferenceMap",
    "ParsedDataset",
    "PlacemarkElement",
    "Row",
    "Schema",
    "freeze_row",
    "ConversionError",
    "InvalidKmlError",
    "MissingKmlEntryError",
    "NoDataToExportError",
    "UnsupportedFormatError",
]
