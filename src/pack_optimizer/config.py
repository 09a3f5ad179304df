"""Runtime settings, read from the environment (and .env when present)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from pack_optimizer.packing.bound import DEFAULT_SLACK_RATIO


class Settings(BaseModel):
    """Solver and service settings."""

    synergy_slack: float = Field(
        default=DEFAULT_SLACK_RATIO,
        ge=0,
        description="Share of the total synergy bonus added to every search bound",
    )
    seed_with_greedy: bool = Field(
        default=True,
        description="Start the search from the greedy packing; false starts from an empty one",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    cpsat_time_limit: float = Field(
        default=10.0,
        gt=0,
        description="Time limit in seconds for the CP-SAT reference solver",
    )


def load_settings(env_file: Optional[Union[str, Path]] = None) -> Settings:
    """
    Build Settings from PACK_OPTIMIZER_* variables.

    Values from `env_file` (or the nearest .env above the working directory)
    fill in what the environment does not set; they never override it.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))

    values: dict[str, str] = {}
    for field_name in Settings.model_fields:
        raw = os.getenv(f"PACK_OPTIMIZER_{field_name.upper()}")
        if raw is not None and raw.strip() != "":
            values[field_name] = raw.strip()
    return Settings(**values)
