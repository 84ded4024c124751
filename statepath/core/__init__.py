"""Core domain types and graph utilities."""

from .models import Loop, Path, Rule, State, StateGraph
from .navigation import (
    build_adjacency_map,
    dead_end_states,
    find_state_by_id,
    find_state_by_name,
    orphaned_states,
    reachable_states,
    referencing_states,
    rule_by_id,
    target_state,
)
from .partition import (
    BoundaryEdge,
    Partition,
    find_boundary_edges,
    find_connected_components,
    find_entry_points,
    find_exit_points,
    find_partitions,
    merge_partitions,
    split_graph,
    split_partition,
    validate_partitions,
)
from .snapshot import load_states, states_from_dicts
from .validation import DeleteCheck, ValidationReport, can_delete_state, validate_states

__all__ = [
    # models
    "Loop",
    "Path",
    "Rule",
    "State",
    "StateGraph",
    # navigation
    "build_adjacency_map",
    "dead_end_states",
    "find_state_by_id",
    "find_state_by_name",
    "orphaned_states",
    "reachable_states",
    "referencing_states",
    "rule_by_id",
    "target_state",
    # partition
    "BoundaryEdge",
    "Partition",
    "find_boundary_edges",
    "find_connected_components",
    "find_entry_points",
    "find_exit_points",
    "find_partitions",
    "merge_partitions",
    "split_graph",
    "split_partition",
    "validate_partitions",
    # snapshot
    "load_states",
    "states_from_dicts",
    # validation
    "DeleteCheck",
    "ValidationReport",
    "can_delete_state",
    "validate_states",
]
