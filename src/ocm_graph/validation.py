"""
Input validation utilities for OCM graphs.

Provides the exception hierarchy shared by the package together with
the validation functions for graph sizes, node indices and free-layer
orderings. Raises descriptive exceptions on invalid input.
"""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Set as AbstractSet
from numbers import Integral
from typing import Any, Iterable


class ValidationError(ValueError):
    """Base exception for invalid input parameters."""

    pass


class InvalidGraphSizeError(ValidationError):
    """Raised when a layer size is negative or not an integer."""

    pass


class InvalidOrderingError(ValidationError):
    """Raised when an ordering is not a permutation of the free layer."""

    pass


class InfeasibleGraphError(ValidationError):
    """Raised when a requested edge count cannot be realised."""

    pass


class NodeIndexError(IndexError):
    """Raised when a node index lies outside the graph."""

    pass


class GenerationError(RuntimeError):
    """Raised when random generation gives up after its attempt budget."""

    pass


class GraphStructureWarning(UserWarning):
    """Warning issued when an edge does not connect the fixed and free layer."""

    pass


def validate_layer_size(value: Any, name: str) -> int:
    """
    Validate a node or edge count.

    Args:
        value: Count to validate
        name: Parameter name used in the error message

    Returns:
        The count as int

    Raises:
        InvalidGraphSizeError: If value is not a non-negative integer
    """
    if not _is_integer(value):
        raise InvalidGraphSizeError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidGraphSizeError(f"{name} must be >= 0, got {value}")
    return int(value)


def validate_node_index(index: Any, node_count: int) -> int:
    """
    Validate that a node index lies in [0, node_count).

    Raises:
        NodeIndexError: If index is out of bounds or not an integer
    """
    if not _is_integer(index):
        raise NodeIndexError(f"Node index must be an integer, got {index!r}")
    if index < 0 or index >= node_count:
        raise NodeIndexError(f"Node index {index} out of bounds [0, {node_count})")
    return int(index)


def validate_ordering(
    ordering: Iterable[Any],
    first_free: int,
    free_count: int,
) -> dict[int, int]:
    """
    Validate a free-layer ordering and map each free node to its position.

    Args:
        ordering: Free node indices, left to right. Any ordered iterable
            (list, tuple, range, numpy array) is copied into a list; sets
            and mappings have no defined order and are rejected
        first_free: Index of the first free node
        free_count: Number of free nodes

    Returns:
        Mapping from free node index to its 0-based position

    Raises:
        InvalidOrderingError: If ordering has the wrong length, contains
            duplicates, contains indices outside the free layer, or is an
            unordered collection
    """
    if isinstance(ordering, (AbstractSet, Mapping)):
        raise InvalidOrderingError(
            f"Ordering must be an ordered sequence, got {type(ordering).__name__}"
        )
    ordering = list(ordering)

    if len(ordering) != free_count:
        raise InvalidOrderingError(
            f"Ordering must contain all {free_count} free nodes, got {len(ordering)} entries"
        )

    end = first_free + free_count
    positions: dict[int, int] = {}
    for position, node in enumerate(ordering):
        if not _is_integer(node):
            raise InvalidOrderingError(f"Ordering entry {position} is not an integer: {node!r}")
        if node < first_free or node >= end:
            raise InvalidOrderingError(
                f"Ordering entry {position}: node {node} is not a free node "
                f"[{first_free}, {end})"
            )
        if node in positions:
            raise InvalidOrderingError(
                f"Ordering entry {position}: node {node} already at position {positions[node]}"
            )
        positions[int(node)] = position

    return positions


def _is_integer(value: Any) -> bool:
    """Check for an integral value, rejecting bools."""
    return isinstance(value, Integral) and not isinstance(value, bool)


__all__ = [
    "ValidationError",
    "InvalidGraphSizeError",
    "InvalidOrderingError",
    "InfeasibleGraphError",
    "NodeIndexError",
    "GenerationError",
    "GraphStructureWarning",
    "validate_layer_size",
    "validate_node_index",
    "validate_ordering",
]
