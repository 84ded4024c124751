"""Reading a states snapshot handed over by the host.

Accepts a YAML or JSON document (JSON is valid YAML) that is either a list of
state mappings or a mapping with a `states` list.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Union

import yaml

from ..errors import SnapshotError
from .models import State

logger = logging.getLogger(__name__)


def states_from_dicts(items: Iterable[Any]) -> List[State]:
    """Convert host state mappings to `State` objects, skipping non-mappings."""
    out: List[State] = []
    skipped = 0
    for item in items:
        if not isinstance(item, dict):
            skipped += 1
            continue
        out.append(State.from_dict(item))
    if skipped:
        logger.warning("Skipped %d snapshot entries that are not mappings", skipped)
    return out


def load_states(path: Union[str, Path]) -> List[State]:
    """Load a states snapshot from a YAML/JSON file."""
    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise SnapshotError(f"Cannot read snapshot {p}: {e}") from e
    except yaml.YAMLError as e:
        raise SnapshotError(f"Cannot parse snapshot {p}: {e}") from e

    if isinstance(data, dict):
        data = data.get("states")
    if data is None:
        return []
    if not isinstance(data, list):
        raise SnapshotError(f"Snapshot {p} does not contain a list of states")

    states = states_from_dicts(data)
    logger.debug("Loaded %d states from %s", len(states), p)
    return states
