"""Custom exception hierarchy for the KML to CSV converter."""

from __future__ import annotations


class ConversionError(RuntimeError):
    """Raised when a file cannot be converted."""

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return a serializable representation."""
        payload = {"message": str(self)}
        if self.details:
            payload["details"] = self.details
        return payload


class UnsupportedFormatError(ConversionError):
    """The uploaded file is neither ``.kml`` nor ``.kmz``."""


class MissingKmlEntryError(ConversionError):
    """A KMZ archive does not contain any ``.kml`` entry."""


class InvalidKmlError(ConversionError):
    """The KML text could not be parsed as XML."""


class NoDataToExportError(ConversionError):
    """An export was requested before any file was converted."""
