"""Tests for feature record selection and emission."""

import logging

from osmtopo.osm.reader import parse_osm_string
from osmtopo.records import collect_records, emit_all, iter_resolved
from tests.conftest import COURTYARD_OSM


def test_named_records_only():
    ctx = parse_osm_string(COURTYARD_OSM)
    records = collect_records(ctx)
    assert [r.id for r in records] == ["N20", "R500"]
    cafe, courtyard = records
    assert cafe.kind == "point"
    assert cafe.name == "Corner Cafe"
    assert cafe.wkt.startswith("POINT")
    assert courtyard.type == "multipolygon"
    assert courtyard.wkt.startswith("POLYGON")


def test_all_resolved_entities_are_exposed():
    ctx = parse_osm_string(COURTYARD_OSM)
    kinds = [kind for kind, _, _ in iter_resolved(ctx)]
    assert kinds.count("point") == 9
    assert kinds.count("path") == 3
    assert kinds.count("composite") == 1
    assert len(collect_records(ctx, named_only=False)) == 13


def test_classifier_attaches_category():
    ctx = parse_osm_string(COURTYARD_OSM)

    def classify(tags):
        return "FOOD_CAFE" if tags.get("amenity") == "cafe" else None

    by_id = {r.id: r for r in collect_records(ctx, classifier=classify)}
    assert by_id["N20"].category == "FOOD_CAFE"
    assert by_id["R500"].category is None


def test_failing_classifier_is_logged(caplog):
    ctx = parse_osm_string(COURTYARD_OSM)

    def broken(tags):
        raise KeyError("category")

    with caplog.at_level(logging.WARNING):
        records = collect_records(ctx, classifier=broken)
    assert all(r.category is None for r in records)
    assert "Classifier failed" in caplog.text


def test_emit_all_calls_emitter():
    ctx = parse_osm_string(COURTYARD_OSM)
    calls = []

    def emit(kind, entity_id, name, entity_type, tags, geometry, category):
        calls.append((kind, entity_id, name, entity_type, geometry.geom_type))

    assert emit_all(ctx, emit) == 2
    assert calls == [
        ("point", "N20", "Corner Cafe", None, "Point"),
        ("composite", "R500", "Courtyard", "multipolygon", "Polygon"),
    ]
