"""KML/KMZ parsing helpers."""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from zipfile import BadZipFile, ZipFile

from ..config import APP_CONFIG, EXTRACTION_CONFIG
from ..core.exceptions import InvalidKmlError, MissingKmlEntryError, UnsupportedFormatError
from ..utils import decode_text

logger = logging.getLogger(__name__)


def file_extension(filename: str) -> str:
    """Return the lower-cased extension of ``filename`` without the dot."""

    return filename.rsplit(".", 1)[1].lower() if "." in filename else ""


def read_kml_text(filename: str, payload: bytes) -> str:
    """Return the KML text carried by ``payload``.

    ``.kml`` payloads are decoded directly. ``.kmz`` payloads are opened as
    ZIP archives and the first entry whose name ends in ``.kml`` is decoded.
    """

    extension = file_extension(filename)
    if extension not in APP_CONFIG.allowed_extensions:
        raise UnsupportedFormatError(
            "Unsupported file format", details={"filename": filename}
        )

    if extension == "kml":
        return decode_text(payload)

    try:
        with ZipFile(io.BytesIO(payload)) as archive:
            entry = next(
                (info for info in archive.infolist() if info.filename.endswith(".kml")),
                None,
            )
            if entry is None:
                raise MissingKmlEntryError(
                    "KML not found in KMZ.", details={"filename": filename}
                )
            logger.debug("Reading %s from %s", entry.filename, filename)
            raw = archive.read(entry)
    except BadZipFile as exc:
        raise MissingKmlEntryError(
            "KML not found in KMZ.", details={"filename": filename, "reason": str(exc)}
        ) from exc

    return decode_text(raw)


class KmlPlacemark:
    """Read-only view over a ``Placemark`` element."""

    __slots__ = ("_node", "_namespace")

    def __init__(self, node: ET.Element, namespace: str):
        self._node = node
        self._namespace = namespace

    def extended_data(self) -> list[tuple[str, str]]:
        pairs = []
        for element in self._node.iter(self._tag("SimpleData")):
            name = element.attrib.get("name")
            if name:
                pairs.append((name, _text_content(element).strip()))
        return pairs

    def coordinate_text(self) -> str | None:
        found = next(self._node.iter(self._tag("coordinates")), None)
        return _text_content(found).strip() if found is not None else None

    def description_html(self) -> str | None:
        found = next(self._node.iter(self._tag("description")), None)
        return _text_content(found) if found is not None else None

    def _tag(self, local_name: str) -> str:
        return f"{{{self._namespace}}}{local_name}"


@dataclass(slots=True)
class KmlDocument:
    """Parsed KML document exposing its placemarks in document order."""

    root: ET.Element
    namespace: str = EXTRACTION_CONFIG.namespace

    def placemarks(self) -> list[KmlPlacemark]:
        tag = f"{{{self.namespace}}}Placemark"
        return [KmlPlacemark(node, self.namespace) for node in self.root.iter(tag)]


class KmlLoader:
    """Load KML documents from KML text, uploads or files on disk."""

    def __init__(self, *, namespace: str | None = None):
        self.namespace = namespace or EXTRACTION_CONFIG.namespace

    def parse(self, kml_text: str) -> KmlDocument:
        try:
            root = ET.fromstring(kml_text)
        except ET.ParseError as exc:
            raise InvalidKmlError(
                "KML document is not well-formed XML", details={"reason": str(exc)}
            ) from exc
        return KmlDocument(root=root, namespace=self.namespace)

    def load_bytes(self, filename: str, payload: bytes) -> KmlDocument:
        return self.parse(read_kml_text(filename, payload))

    def load(self, path: Path | str) -> KmlDocument:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"KML/KMZ file not found: {path}")
        return self.load_bytes(path.name, path.read_bytes())


def _text_content(element: ET.Element) -> str:
    return "".join(element.itertext())
