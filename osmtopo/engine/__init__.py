"""Topology reconstruction engine."""

from osmtopo.engine.composite_resolver import CompositeResolver, ResolveOutcome
from osmtopo.engine.config import ResolverConfig
from osmtopo.engine.context import CompositeEntity, MemberRef, ParseContext, PathEntity, PointEntity
from osmtopo.engine.deferred import DeferredQueue
from osmtopo.engine.indices import EntityIndex
from osmtopo.engine.path_builder import PathBuilder, build_path_geometry
from osmtopo.engine.pipeline import TopologyPipeline
from osmtopo.engine.ring_assembler import merge_fragments

__all__ = [
    "CompositeEntity",
    "CompositeResolver",
    "DeferredQueue",
    "EntityIndex",
    "MemberRef",
    "ParseContext",
    "PathBuilder",
    "PathEntity",
    "PointEntity",
    "ResolveOutcome",
    "ResolverConfig",
    "TopologyPipeline",
    "build_path_geometry",
    "merge_fragments",
]
