"""Feature records handed to downstream emitters."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

EntityKind = Literal["point", "path", "composite"]


class FeatureRecord(BaseModel):
    kind: EntityKind
    id: str = Field(..., description="Entity id prefixed with N, W or R")
    name: str | None = None
    type: str | None = None
    tags: dict[str, str] = Field(default_factory=dict)
    wkt: str = Field(..., description="Resolved geometry as WKT")
    category: str | None = None
