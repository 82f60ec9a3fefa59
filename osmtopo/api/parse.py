"""POST /api/parse — reconstruct geometries from an OSM XML document."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, HTTPException

from osmtopo.config import settings
from osmtopo.models.requests import ParseRequest
from osmtopo.models.responses import ParseResponse, ParseSummary
from osmtopo.osm.reader import parse_osm_string
from osmtopo.records import collect_records

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/parse", response_model=ParseResponse)
def parse(request: ParseRequest) -> ParseResponse:
    data = request.osm.encode("utf-8")
    if len(data) > settings.max_document_bytes:
        raise HTTPException(status_code=413, detail="OSM document too large")

    start = time.perf_counter()
    ctx = parse_osm_string(data)
    features = collect_records(ctx, named_only=request.named_only)
    elapsed = (time.perf_counter() - start) * 1000

    return ParseResponse(
        features=features,
        summary=ParseSummary(**ctx.summary()),
        processing_time_ms=round(elapsed, 1),
        unresolved=list(ctx.unresolved),
        invalid=list(ctx.invalid),
        errors=dict(ctx.errors),
    )
