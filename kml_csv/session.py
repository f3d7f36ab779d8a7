"""Ownership of the "current dataset" slot.

A :class:`ConversionSession` tracks which file was selected last and which
conversion result is current. Its lifecycle is:

* ``select`` whenever a new file is chosen; it returns a ticket that the
  eventual result must present.
* ``complete`` with the ticket once the conversion finishes. Only the ticket
  of the most recent selection may replace the current value, so a slow
  conversion of an older file never overwrites a newer result.
* ``fail`` when the conversion raised; the previous value stays current.
* ``export`` to read the current value.

The in-process converter stores :class:`~kml_csv.core.ParsedDataset`
objects; the HTTP API stores conversion ids and keeps the session in the
signed Flask cookie through ``to_dict``/``from_dict``.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import asdict, dataclass
from typing import Any, Mapping

from .core import ParsedDataset
from .core.exceptions import ConversionError, NoDataToExportError

logger = logging.getLogger(__name__)

NO_DATA_MESSAGE = "No data to convert. Please upload a valid KML/KMZ file first."


@dataclass
class ConversionSession:
    latest: str | None = None
    latest_name: str = ""
    pending: bool = False
    current: Any = None
    current_name: str = ""

    def select(self, filename: str, ticket: str | None = None) -> str:
        """Record a new file selection and return its ticket."""

        self.latest = ticket or uuid.uuid4().hex
        self.latest_name = filename
        self.pending = True
        logger.debug("Selected %s (ticket %s)", filename, self.latest)
        return self.latest

    def complete(self, ticket: str, value: Any) -> bool:
        """Make ``value`` current if ``ticket`` belongs to the latest selection."""

        if ticket != self.latest:
            logger.warning("Discarding stale conversion result for ticket %s", ticket)
            return False
        self.current = value
        self.current_name = self.latest_name
        self.pending = False
        return True

    def fail(self, ticket: str) -> None:
        if ticket == self.latest:
            self.pending = False

    def export(self) -> Any:
        if self.current is None:
            raise NoDataToExportError(NO_DATA_MESSAGE)
        return self.current

    def load(self, pipeline, filename: str, payload: bytes) -> ParsedDataset:
        """Convert ``payload`` with ``pipeline`` and make the result current."""

        ticket = self.select(filename)
        try:
            dataset = pipeline.run(filename, payload)
        except ConversionError:
            self.fail(ticket)
            raise
        self.complete(ticket, dataset)
        return dataset

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any] | None) -> "ConversionSession":
        if not payload:
            return cls()
        return cls(**{key: payload[key] for key in cls.__dataclass_fields__ if key in payload})
