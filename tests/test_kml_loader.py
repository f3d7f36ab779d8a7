from __future__ import annotations

import io
import zipfile
from pathlib import Path

import pytest

from conftest import kml_document, placemark_xml

from kml_csv.core.exceptions import (
    InvalidKmlError,
    MissingKmlEntryError,
    UnsupportedFormatError,
)
from kml_csv.services import KmlLoader, read_kml_text


def _kmz(entries: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def test_read_kml_text_decodes_kml():
    text = kml_document(placemark_xml({"Kind": "Poste électrique"}))

    assert read_kml_text("network.KML", text.encode("utf-8")) == text


def test_read_kml_text_uses_first_kml_entry_of_kmz():
    payload = _kmz({"files/icon.png": "png", "first.kml": "<a/>", "doc.kml": "<b/>"})

    assert read_kml_text("network.kmz", payload) == "<a/>"


def test_read_kml_text_rejects_kmz_without_kml():
    with pytest.raises(MissingKmlEntryError, match="KML not found in KMZ."):
        read_kml_text("network.kmz", _kmz({"readme.txt": "hi"}))


def test_read_kml_text_rejects_non_zip_kmz():
    with pytest.raises(MissingKmlEntryError):
        read_kml_text("network.kmz", b"not a zip")


@pytest.mark.parametrize("filename", ["network.csv", "network", "kml"])
def test_read_kml_text_rejects_unknown_extensions(filename):
    with pytest.raises(UnsupportedFormatError, match="Unsupported file format"):
        read_kml_text(filename, b"")


def test_placemarks_expose_extended_data_coordinates_and_description():
    text = kml_document(
        placemark_xml(
            {"FAT_CODE": " F1 ", "Kind": "drop"},
            coordinates="\n  -122.4194,37.7749,0\n",
            description="<table><tr><td>Status</td><td>Built</td></tr></table>",
            name="Drop",
        ),
        placemark_xml(),
    )

    placemarks = KmlLoader().parse(text).placemarks()

    assert len(placemarks) == 2
    first, second = placemarks
    assert first.extended_data() == [("FAT_CODE", "F1"), ("Kind", "drop")]
    assert first.coordinate_text() == "-122.4194,37.7749,0"
    assert "<td>Status</td>" in first.description_html()
    assert second.extended_data() == []
    assert second.coordinate_text() is None
    assert second.description_html() is None


def test_elements_outside_kml_namespace_are_ignored():
    text = kml_document(
        placemark_xml({"Kind": "drop"}), namespace="http://earth.google.com/kml/2.1"
    )

    assert KmlLoader().parse(text).placemarks() == []


def test_parse_rejects_malformed_xml():
    with pytest.raises(InvalidKmlError):
        KmlLoader().parse("<kml><Document>")


def test_load_reads_file_from_disk(tmp_path: Path):
    path = tmp_path / "network.kmz"
    path.write_bytes(_kmz({"doc.kml": kml_document(placemark_xml({"Kind": "drop"}))}))

    document = KmlLoader().load(path)

    assert [pm.extended_data() for pm in document.placemarks()] == [[("Kind", "drop")]]


def test_non_utf8_kml_is_decoded_with_detected_encoding(caplog):
    values = {
        "Commune": "Genève",
        "Quartier": "Pâquis",
        "Remarque": "Câble posé sur façade, accès par la cour intérieure près du café",
        "Statut": "Réalisé",
    }
    text = kml_document(*[placemark_xml(values) for _ in range(5)])
    payload = text.encode("cp1252")

    with caplog.at_level("WARNING", logger="kml_csv.utils.io"):
        placemarks = KmlLoader().load_bytes("reseau.kml", payload).placemarks()

    assert dict(placemarks[0].extended_data()) == values
    assert "not valid UTF-8" in caplog.text
