"""Stream handler — indexes entities as they arrive and drains deferred composites at the end."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from osmtopo.engine.composite_resolver import CompositeResolver, ResolveOutcome
from osmtopo.engine.config import ResolverConfig
from osmtopo.engine.context import CompositeEntity, MemberRef, ParseContext, PathEntity, PointEntity
from osmtopo.engine.errors import MissingReferenceError
from osmtopo.engine.path_builder import PathBuilder

logger = logging.getLogger(__name__)

MemberLike = MemberRef | tuple | str


def _as_member(member: MemberLike) -> MemberRef:
    if isinstance(member, MemberRef):
        return member
    if isinstance(member, str):
        return MemberRef(ref=member)
    return MemberRef(*member)


class TopologyPipeline:
    """Receives point, path and composite records in stream order.

    Points must precede the paths that use them; composites are resolved on
    arrival when possible and deferred otherwise. ``on_end_of_stream`` runs
    the single retry pass over the deferred composites.
    """

    def __init__(self, config: ResolverConfig | None = None, context: ParseContext | None = None) -> None:
        self.config = config or ResolverConfig()
        self.ctx = context or ParseContext()
        self.path_builder = PathBuilder(self.ctx.point_index, self.config)
        self.resolver = CompositeResolver(
            self.ctx.point_index,
            self.ctx.path_index,
            self.ctx.composite_index,
            self.ctx.deferred,
            self.config,
        )
        self._start = time.perf_counter()

    # ------------------------------------------------------------------
    # Input feed
    # ------------------------------------------------------------------

    def on_point(self, point_id: str, x: float, y: float, tags: Mapping[str, str] | None = None) -> PointEntity | None:
        try:
            point = PointEntity(id=str(point_id), x=float(x), y=float(y), tags=dict(tags or {}))
            self.ctx.point_index.add(point.id, point.geometry)
        except Exception as e:
            self._record_error(str(point_id), "point", e)
            return None
        self.ctx.points.append(point)
        return point

    def on_path(
        self,
        path_id: str,
        point_ids: Sequence[str],
        tags: Mapping[str, str] | None = None,
    ) -> PathEntity:
        path = PathEntity(id=str(path_id), member_point_ids=[str(r) for r in point_ids], tags=dict(tags or {}))
        self.ctx.paths.append(path)
        try:
            geom = self.path_builder.build(path)
            self.ctx.path_index.add(path.id, geom)
            path.geometry = geom
        except MissingReferenceError as e:
            self.ctx.errors[f"path/{path.id}"] = str(e)
            logger.warning("Skipping path %s: point %s not indexed", path.id, e.ref)
        except Exception as e:
            self._record_error(path.id, "path", e)
        return path

    def on_composite(
        self,
        composite_id: str,
        members: Iterable[MemberLike],
        tags: Mapping[str, str] | None = None,
    ) -> CompositeEntity | None:
        composite_id = str(composite_id)
        try:
            composite = CompositeEntity(
                id=composite_id,
                members=[_as_member(m) for m in members],
                tags=dict(tags or {}),
            )
        except Exception as e:
            self._record_error(composite_id, "composite", e)
            return None

        if composite_id in self.ctx.composites:
            self._record_error(composite_id, "composite", ValueError(f"Duplicate composite id: {composite_id}"))
            return None
        self.ctx.composites[composite_id] = composite

        outcome = self._resolve(composite)
        if outcome is not None and outcome.is_deferred:
            self.ctx.deferred.push(composite_id)
            logger.debug("Composite %s deferred (%s)", composite_id, outcome.reason)
        return composite

    def on_end_of_stream(self) -> ParseContext:
        """Retry every deferred composite once, in FIFO order, then report."""
        if self.ctx.finished:
            return self.ctx

        pending = self.ctx.deferred.pending()
        still_pending: list[str] = []
        for composite_id in pending:
            composite = self.ctx.composites[composite_id]
            outcome = self._resolve(composite)
            if outcome is None or not outcome.is_resolved:
                still_pending.append(composite_id)
        self.ctx.deferred.retain(still_pending)

        if pending:
            logger.info(
                "Deferred pass: %d/%d composites resolved",
                len(pending) - len(still_pending),
                len(pending),
            )

        self.ctx.finished = True
        elapsed = (time.perf_counter() - self._start) * 1000
        summary = self.ctx.summary()
        logger.info(
            "Parse complete: %d points, %d/%d paths, %d/%d composites in %.0fms (%d unresolved, %d invalid)",
            summary["points"],
            summary["paths_resolved"],
            summary["paths"],
            summary["composites_resolved"],
            summary["composites"],
            elapsed,
            summary["unresolved"],
            summary["invalid"],
        )
        return self.ctx

    def run(self, records: Iterable[tuple[Any, ...]]) -> ParseContext:
        """Feed ``("point", id, x, y, tags)``, ``("path", id, refs, tags)`` and
        ``("composite", id, members, tags)`` records, then end the stream."""
        handlers = {
            "point": self.on_point,
            "path": self.on_path,
            "composite": self.on_composite,
        }
        for kind, *payload in records:
            handler = handlers.get(kind)
            if handler is None:
                logger.warning("Ignoring record of unknown kind %r", kind)
                continue
            handler(*payload)
        return self.on_end_of_stream()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, composite: CompositeEntity) -> ResolveOutcome | None:
        try:
            outcome = self.resolver.resolve(composite)
        except Exception as e:
            self._record_error(composite.id, "composite", e)
            return None

        if outcome.is_resolved:
            self.ctx.composite_index.add(composite.id, outcome.geometry)
            composite.geometry = outcome.geometry
            if not outcome.valid:
                self.ctx.invalid.append(composite.id)
        elif not outcome.is_deferred:
            self.ctx.unresolved.append(composite.id)
            logger.warning("Composite %s unresolved: %s", composite.id, outcome.reason)
        return outcome

    def _record_error(self, entity_id: str, kind: str, error: Exception) -> None:
        self.ctx.errors[f"{kind}/{entity_id}"] = str(error)
        logger.warning("Skipping %s %s: %s", kind, entity_id, error)
