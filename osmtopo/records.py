"""Turn a finished ParseContext into feature records for downstream emitters.

The engine exposes every resolved entity; choosing which ones to emit (by
default, only those carrying a ``name`` tag) happens here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping

from shapely.geometry.base import BaseGeometry

from osmtopo.engine.context import CompositeEntity, ParseContext, PathEntity, PointEntity
from osmtopo.models.features import EntityKind, FeatureRecord

logger = logging.getLogger(__name__)

# tags -> category, supplied by an external classification scheme
Classifier = Callable[[Mapping[str, str]], "str | None"]
Emitter = Callable[
    [EntityKind, str, "str | None", "str | None", Mapping[str, str], BaseGeometry, "str | None"],
    None,
]

_ID_PREFIX: dict[str, str] = {"point": "N", "path": "W", "composite": "R"}

Entity = PointEntity | PathEntity | CompositeEntity


def iter_resolved(ctx: ParseContext) -> Iterator[tuple[EntityKind, Entity, BaseGeometry]]:
    """Yield every entity that ended up with a geometry, in stream order."""
    for point in ctx.points:
        yield "point", point, point.geometry
    for path in ctx.paths:
        if path.geometry is not None:
            yield "path", path, path.geometry
    for composite in ctx.composites.values():
        if composite.geometry is not None:
            yield "composite", composite, composite.geometry


def _classify(classifier: Classifier | None, kind: str, entity: Entity) -> str | None:
    if classifier is None:
        return None
    try:
        return classifier(entity.tags)
    except Exception as e:
        logger.warning("Classifier failed for %s %s: %s", kind, entity.id, e)
        return None


def _selected(
    ctx: ParseContext,
    classifier: Classifier | None,
    named_only: bool,
) -> Iterator[tuple[EntityKind, str, Entity, BaseGeometry, str | None]]:
    for kind, entity, geom in iter_resolved(ctx):
        if named_only and "name" not in entity.tags:
            continue
        yield kind, _ID_PREFIX[kind] + entity.id, entity, geom, _classify(classifier, kind, entity)


def collect_records(
    ctx: ParseContext,
    classifier: Classifier | None = None,
    named_only: bool = True,
) -> list[FeatureRecord]:
    records = [
        FeatureRecord(
            kind=kind,
            id=record_id,
            name=entity.tags.get("name"),
            type=entity.tags.get("type"),
            tags=dict(entity.tags),
            wkt=geom.wkt,
            category=category,
        )
        for kind, record_id, entity, geom, category in _selected(ctx, classifier, named_only)
    ]
    logger.info("Collected %d feature records", len(records))
    return records


def emit_all(
    ctx: ParseContext,
    emit: Emitter,
    classifier: Classifier | None = None,
    named_only: bool = True,
) -> int:
    """Call ``emit(kind, id, name, type, tags, geometry, category)`` per selected entity."""
    count = 0
    for kind, record_id, entity, geom, category in _selected(ctx, classifier, named_only):
        emit(kind, record_id, entity.tags.get("name"), entity.tags.get("type"), entity.tags, geom, category)
        count += 1
    return count
