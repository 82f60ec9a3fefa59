"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from osmtopo.models.features import FeatureRecord


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"


class ParseSummary(BaseModel):
    points: int = 0
    paths: int = 0
    paths_resolved: int = 0
    composites: int = 0
    composites_resolved: int = 0
    unresolved: int = 0
    invalid: int = 0
    errors: int = 0


class ParseResponse(BaseModel):
    features: list[FeatureRecord] = Field(default_factory=list)
    summary: ParseSummary = Field(default_factory=ParseSummary)
    processing_time_ms: float = 0.0
    unresolved: list[str] = Field(default_factory=list)
    invalid: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
