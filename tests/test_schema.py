from __future__ import annotations

from kml_csv.services import SchemaUnifier


def test_unify_keeps_first_seen_order_across_rows():
    rows = [
        {"Latitude": "", "Longitude": "", "A": "1", "POLE_FAT": ""},
        {"Latitude": "", "Longitude": "", "B": "2", "A": "3", "C": "", "POLE_FAT": ""},
    ]

    assert SchemaUnifier().unify(rows) == ("A", "POLE_FAT", "B", "C")


def test_unify_places_pole_fat_after_fat_code():
    rows = [
        {"Latitude": "", "Longitude": "", "Kind": "pole", "POLE_FAT": ""},
        {"Latitude": "", "Longitude": "", "FAT_CODE": "F1", "Owner": "x", "POLE_FAT": "P1"},
    ]

    schema = SchemaUnifier().unify(rows)

    assert schema == ("Kind", "FAT_CODE", "POLE_FAT", "Owner")
    assert schema.count("POLE_FAT") == 1


def test_unify_hides_name_and_coordinates():
    rows = [{"Latitude": "1", "Longitude": "2", "Name": "n", "FAT_CODE": "F", "POLE_FAT": ""}]

    schema = SchemaUnifier().unify(rows)

    assert not {"Name", "Latitude", "Longitude"} & set(schema)
    assert schema == ("FAT_CODE", "POLE_FAT")


def test_unify_empty_rows():
    assert SchemaUnifier().unify([]) == ()
