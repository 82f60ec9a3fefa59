"""OSM XML reader — streams <node>, <way> and <relation> elements into a TopologyPipeline.

Elements are handed over in document order and cleared as soon as they have
been consumed, so memory is dominated by the engine's indices rather than
by the XML tree.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
from os import PathLike
from typing import IO

from osmtopo.engine.context import MemberRef, ParseContext
from osmtopo.engine.pipeline import TopologyPipeline

logger = logging.getLogger(__name__)

_ENTITY_TAGS = ("node", "way", "relation")
_MEMBER_TYPES = {"node", "way", "relation"}


def _tags(elem: ET.Element) -> dict[str, str]:
    return {t.get("k"): t.get("v", "") for t in elem.iterfind("tag") if t.get("k") is not None}


def _members(elem: ET.Element) -> list[MemberRef]:
    members = []
    for m in elem.iterfind("member"):
        ref = m.get("ref")
        if ref is None:
            continue
        member_type = m.get("type")
        members.append(
            MemberRef(
                ref=ref,
                role=m.get("role") or None,
                type=member_type if member_type in _MEMBER_TYPES else None,
            )
        )
    return members


def _dispatch(elem: ET.Element, pipeline: TopologyPipeline) -> None:
    entity_id = elem.get("id")
    if entity_id is None:
        logger.warning("Skipping <%s> without id", elem.tag)
        return

    if elem.tag == "node":
        pipeline.on_point(entity_id, elem.get("lon"), elem.get("lat"), _tags(elem))
    elif elem.tag == "way":
        refs = [nd.get("ref") for nd in elem.iterfind("nd") if nd.get("ref") is not None]
        pipeline.on_path(entity_id, refs, _tags(elem))
    else:
        pipeline.on_composite(entity_id, _members(elem), _tags(elem))


def parse_osm(
    source: str | PathLike | IO[bytes],
    pipeline: TopologyPipeline | None = None,
) -> ParseContext:
    """Stream an OSM XML document through ``pipeline`` and drain its deferred queue.

    A document that breaks off mid-stream is logged; whatever was indexed up
    to that point is still resolved.
    """
    pipeline = pipeline or TopologyPipeline()
    count = 0
    root = None
    try:
        for event, elem in ET.iterparse(source, events=("start", "end")):
            if event == "start":
                if root is None:
                    root = elem
                continue
            if elem.tag not in _ENTITY_TAGS:
                continue
            _dispatch(elem, pipeline)
            count += 1
            # Entities are direct children of <osm>; drop the ones already consumed
            root.clear()
    except ET.ParseError as e:
        logger.warning("OSM document truncated or malformed after %d entities: %s", count, e)

    logger.debug("Read %d OSM entities", count)
    return pipeline.on_end_of_stream()


def parse_osm_string(text: str | bytes, pipeline: TopologyPipeline | None = None) -> ParseContext:
    data = text.encode("utf-8") if isinstance(text, str) else text
    return parse_osm(io.BytesIO(data), pipeline)
