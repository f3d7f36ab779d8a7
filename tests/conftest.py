from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

_STORAGE = Path(tempfile.mkdtemp(prefix="kml-csv-tests-"))
os.environ.setdefault("KML_CSV_UPLOADS", str(_STORAGE / "uploads"))
os.environ.setdefault("KML_CSV_OUTPUTS", str(_STORAGE / "outputs"))

KML_NS = "http://www.opengis.net/kml/2.2"


class FakePlacemark:
    """In-memory stand-in for a parsed placemark."""

    def __init__(self, data=None, coordinates=None, description=None):
        self.data = list((data or {}).items())
        self.coordinates = coordinates
        self.description = description

    def extended_data(self):
        return list(self.data)

    def coordinate_text(self):
        return self.coordinates

    def description_html(self):
        return self.description


def placemark_xml(data=None, coordinates=None, description=None, name=None) -> str:
    parts = ["<Placemark>"]
    if name is not None:
        parts.append(f"<name>{name}</name>")
    if description is not None:
        parts.append(f"<description><![CDATA[{description}]]></description>")
    if data:
        parts.append('<ExtendedData><SchemaData schemaUrl="#s">')
        for key, value in data.items():
            parts.append(f'<SimpleData name="{key}">{value}</SimpleData>')
        parts.append("</SchemaData></ExtendedData>")
    if coordinates is not None:
        parts.append(f"<Point><coordinates>{coordinates}</coordinates></Point>")
    parts.append("</Placemark>")
    return "".join(parts)


def kml_document(*placemarks: str, namespace: str = KML_NS) -> str:
    body = "".join(placemarks)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<kml xmlns="{namespace}"><Document>{body}</Document></kml>'
    )


@pytest.fixture()
def fat_kml() -> str:
    """Two placemarks: the second resolves its FAT_CODE through the first."""

    return kml_document(
        placemark_xml(
            {"FAT_CODE": "F1", "Name": "Drop 1", "OBJECTID": "7"},
            coordinates="-122.419400,37.774900,0",
        ),
        placemark_xml(
            {"FAT_ID_NETWORK_ID": "F1", "Pole_ID__New_": "P1", "Shape_Length": "3.2"},
            coordinates="-122.5,37.8,0",
        ),
    )
