"""
statepath: path finding over state-machine rule graphs.

Main interface: find_paths(), find_loops(), find_shortest_path(), is_reachable()
"""

__version__ = "0.3.0"

from .config import SearchSettings, load_settings
from .core.models import Loop, Path, Rule, State
from .core.snapshot import load_states, states_from_dicts
from .errors import CancelledError, InvalidSearchError, NotFoundError, SnapshotError, StatePathError
from .search import CancelToken, PathFinder, find_loops, find_paths, find_shortest_path, is_reachable

__all__ = [
    "CancelToken",
    "CancelledError",
    "InvalidSearchError",
    "Loop",
    "NotFoundError",
    "Path",
    "PathFinder",
    "Rule",
    "SearchSettings",
    "SnapshotError",
    "State",
    "StatePathError",
    "find_loops",
    "find_paths",
    "find_shortest_path",
    "is_reachable",
    "load_settings",
    "load_states",
    "states_from_dicts",
]
