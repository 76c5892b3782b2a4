from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, Field, field_validator


MAX_DEPTH = 6


class EngineSettings(BaseModel):
    """Runtime settings shared by the interactive CLI and the UCI adapter."""

    depth: int = Field(
        default=3, ge=0, le=MAX_DEPTH, description="Search depth below the root move"
    )
    promotion: str = Field(default="q", pattern="^[qrbnQRBN]$", description="Promotion piece")
    seed: Optional[int] = Field(default=None, description="Seed for move-order shuffling")
    ai_color: str = Field(default="b", pattern="^[wb]$", description="Side played by the engine")
    log_level: str = Field(default="WARNING", description="Logging level name")

    @field_validator("promotion")
    @classmethod
    def _lower_promotion(cls, v: str) -> str:
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {v!r}")
        return level
