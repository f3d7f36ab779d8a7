from __future__ import annotations

from conftest import FakePlacemark, kml_document, placemark_xml

from kml_csv.pipelines import ConversionPipeline

EXCLUDED = {"HPTAR_ID", "OBJECTID", "Shape_Length", "Shape_Area"}


def test_run_resolves_cross_reference_end_to_end(fat_kml: str):
    pipeline = ConversionPipeline.default()

    dataset = pipeline.run("network.kml", fat_kml.encode("utf-8"))

    first, second = dataset.rows
    assert first["POLE_FAT"] == "P1"
    assert second["POLE_FAT"] == ""
    assert first["Longitude"] == "-122.419400"
    assert first["Latitude"] == "37.774900"
    assert dataset.schema == ("FAT_CODE", "POLE_FAT", "FAT_ID_NETWORK_ID", "Pole_ID__New_")
    assert dataset.csv_filename == "network.csv"


def test_cross_reference_independent_of_placemark_order():
    definer = {"FAT_ID_NETWORK_ID": "F1", "Pole_ID__New_": "P1"}
    user = {"FAT_CODE": "F1"}
    pipeline = ConversionPipeline.default()

    forward = pipeline.convert([FakePlacemark(definer), FakePlacemark(user)])
    backward = pipeline.convert([FakePlacemark(user), FakePlacemark(definer)])

    assert forward.rows[1]["POLE_FAT"] == "P1"
    assert backward.rows[0]["POLE_FAT"] == "P1"


def test_excluded_keys_never_reach_schema_or_rows(fat_kml: str):
    dataset = ConversionPipeline.default().run("network.kml", fat_kml.encode("utf-8"))

    assert not EXCLUDED & set(dataset.schema)
    for row in dataset.rows:
        assert not EXCLUDED & set(row)


def test_to_csv_renders_dataset():
    text = kml_document(
        placemark_xml(
            {"Name": "Drop 1", "FAT_CODE": "F1", "Length": "12.3"},
            description='<table><tr><td>Note</td><td>He said "hi"</td></tr></table>',
        ),
        placemark_xml({"FAT_ID_NETWORK_ID": "F1", "Pole_ID__New_": "P1"}),
    )
    pipeline = ConversionPipeline.default()

    csv_text = pipeline.to_csv(pipeline.run("drops.kml", text.encode("utf-8")))

    assert csv_text.split("\n") == [
        "FAT_CODE,POLE_FAT,Length,Note,FAT_ID_NETWORK_ID,Pole_ID__New_",
        '"F1","P1","12.300000","He said ""hi""","",""',
        '"","","","","F1","P1"',
    ]


def test_document_without_placemarks_yields_empty_dataset():
    dataset = ConversionPipeline.default().run("empty.kml", kml_document().encode("utf-8"))

    assert dataset.schema == ()
    assert dataset.rows == ()
