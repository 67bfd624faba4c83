"""Configuration model for Datimer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    """Settings read from config.json. Every field has a default."""

    default_output: str = Field(
        default=".datimer_history",
        description="History log used when no output path is given",
    )
    persist_interval_seconds: float = Field(
        default=20.0, gt=0, description="Longest gap between log rewrites"
    )
    time_column: int = Field(
        default=14, ge=1, description="Screen column where times start"
    )
