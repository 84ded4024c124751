"""Search tuning settings.

Loaded from an optional YAML file and `STATEPATH_*` environment overrides:

    batch_size: 10          # paths per on_path_batch delivery
    yield_interval: 0.1     # seconds between progress updates / yields
    depth_multiplier: 2     # depth cap = len(states) * depth_multiplier
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

CONFIG_ENV = "STATEPATH_CONFIG"

_ENV_OVERRIDES: Dict[str, str] = {
    "batch_size": "STATEPATH_BATCH_SIZE",
    "yield_interval": "STATEPATH_YIELD_INTERVAL",
    "depth_multiplier": "STATEPATH_DEPTH_MULTIPLIER",
}


class SearchSettings(BaseModel):
    """Tunable constants shared by the path finder and loop detector."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    batch_size: int = Field(
        default=10,
        description="Number of new complete paths between on_path_batch calls",
        ge=1,
    )
    yield_interval: float = Field(
        default=0.1,
        description="Seconds between throttled progress updates and cooperative yields",
        ge=0,
    )
    depth_multiplier: int = Field(
        default=2,
        description="Maximum DFS depth as a multiple of the number of states",
        ge=1,
    )


def _read_yaml(path: Path) -> Dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        logger.warning("Ignoring settings file %s: top level is not a mapping", path)
        return {}
    return data


def load_settings(path: Optional[Union[str, Path]] = None) -> SearchSettings:
    """Load settings from YAML (explicit path, else $STATEPATH_CONFIG) plus env overrides.

    Unknown keys in the file are dropped. A missing file means defaults.
    Invalid values raise `pydantic.ValidationError`.
    """
    values: Dict[str, Any] = {}

    source = path if path is not None else (os.environ.get(CONFIG_ENV) or "").strip()
    if source:
        config_path = Path(source)
        if config_path.exists():
            raw = _read_yaml(config_path)
            values = {k: v for k, v in raw.items() if k in SearchSettings.model_fields}
        else:
            logger.debug("Settings file %s does not exist; using defaults", config_path)

    for key, env_name in _ENV_OVERRIDES.items():
        env_value = (os.environ.get(env_name) or "").strip()
        if env_value:
            values[key] = env_value

    return SearchSettings(**values)
