"""Graph searches over a states snapshot."""

from .cancel import CancelToken, Checkpoint
from .finder import PathFinder
from .loops import find_loops, first_loop_from
from .paths import SearchMode, find_paths, resolve_mode
from .shortest import find_shortest_path, is_reachable, shortest_distances

__all__ = [
    "CancelToken",
    "Checkpoint",
    "PathFinder",
    "SearchMode",
    "find_loops",
    "find_paths",
    "find_shortest_path",
    "first_loop_from",
    "is_reachable",
    "resolve_mode",
    "shortest_distances",
]
