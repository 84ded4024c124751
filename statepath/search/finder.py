from __future__ import annotations

from typing import Any, List, Optional, Sequence

from ..config import SearchSettings
from ..core.models import Loop, Path, State
from . import loops, paths, shortest
from .cancel import ProgressCallback
from .paths import PathBatchCallback


class PathFinder:
    """
    Search entry points bound to one set of tuning constants.

    Holds no per-call state; one instance can serve concurrent searches.
    """

    def __init__(self, settings: Optional[SearchSettings] = None):
        self.settings = settings or SearchSettings()

    async def find_paths(
        self,
        states: Sequence[State],
        start_state_id: str,
        *,
        end_state_id: Optional[str] = None,
        intermediate_state_id: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
        on_path_batch: Optional[PathBatchCallback] = None,
        cancel_token: Optional[Any] = None,
    ) -> List[Path]:
        return await paths.find_paths(
            states,
            start_state_id,
            end_state_id=end_state_id,
            intermediate_state_id=intermediate_state_id,
            on_progress=on_progress,
            on_path_batch=on_path_batch,
            cancel_token=cancel_token,
            settings=self.settings,
        )

    async def find_loops(
        self,
        states: Sequence[State],
        *,
        on_progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[Any] = None,
    ) -> List[Loop]:
        return await loops.find_loops(
            states, on_progress=on_progress, cancel_token=cancel_token, settings=self.settings
        )

    def find_shortest_path(self, states: Sequence[State], from_state_id: str, to_state_id: str) -> Optional[Path]:
        return shortest.find_shortest_path(states, from_state_id, to_state_id)

    def is_reachable(self, states: Sequence[State], from_state_id: str, to_state_id: str) -> bool:
        return shortest.is_reachable(states, from_state_id, to_state_id)
