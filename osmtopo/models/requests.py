"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class ParseRequest(BaseModel):
    osm: str = Field(..., description="Raw OSM XML document")
    named_only: bool = Field(default=True, description="Only return entities carrying a name tag")
