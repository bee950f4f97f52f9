"""
Random OCM graph generators.

All generators draw from a private ``random.Random`` instance, either
passed in as ``rng`` or seeded from ``random_seed``, so the module-level
random state is never touched and seeded runs are reproducible.
"""

from __future__ import annotations

import random
from typing import Optional

from ..graph import OcmGraph
from ..validation import (
    GenerationError,
    InfeasibleGraphError,
    ValidationError,
    validate_layer_size,
)


def _make_rng(rng: Optional[random.Random], random_seed: Optional[int]) -> random.Random:
    """Use the injected generator, else a fresh one seeded with random_seed."""
    if rng is not None:
        return rng
    return random.Random(random_seed)


def build_no_crossing_graph(
    number_of_fixed_nodes: int,
    *,
    rng: Optional[random.Random] = None,
    random_seed: Optional[int] = None,
) -> tuple[OcmGraph, list[int]]:
    """
    Build a graph that can be drawn without crossings.

    Both layers get ``number_of_fixed_nodes`` nodes. The free layer is
    shuffled into a witness ordering p; fixed node i is then joined to
    p[i] and p[i + 1], and the last fixed node to the last entry of p.
    Consecutive fixed nodes share one neighbor, forming a caterpillar.

    The zero-crossing property holds for the returned ordering only, not
    for the default ascending one.

    Example:
        graph, ordering = build_no_crossing_graph(5, random_seed=42)
        graph.compute_crossings_for_ordering(ordering)  # 0

    Args:
        number_of_fixed_nodes: Size of each layer
        rng: Random generator to draw from
        random_seed: Seed used when rng is None

    Returns:
        Tuple of (graph, witness_ordering)

    Raises:
        InvalidGraphSizeError: If number_of_fixed_nodes is negative
    """
    n = validate_layer_size(number_of_fixed_nodes, "number_of_fixed_nodes")
    graph = OcmGraph(n, n)
    if n == 0:
        return graph, []

    ordering = list(graph.free_nodes)
    _make_rng(rng, random_seed).shuffle(ordering)

    for fixed_node in range(n - 1):
        graph.add_edge(ordering[fixed_node], fixed_node)
        graph.add_edge(ordering[fixed_node + 1], fixed_node)

    graph.add_edge(ordering[-1], n - 1)

    return graph, ordering


def build_random_graph(
    number_of_fixed_nodes: int,
    number_of_free_nodes: int,
    number_of_edges: int,
    *,
    rng: Optional[random.Random] = None,
    random_seed: Optional[int] = None,
    max_attempts: Optional[int] = None,
) -> OcmGraph:
    """
    Build a graph with uniformly random fixed-free edges.

    Edges are drawn by rejection sampling: a uniform fixed node and a
    uniform free node are paired, and duplicates are drawn again until
    exactly ``number_of_edges`` distinct edges exist. The feasibility
    check guarantees termination; ``max_attempts`` bounds the number of
    draws explicitly.

    Args:
        number_of_fixed_nodes: Size of the fixed layer
        number_of_free_nodes: Size of the free layer
        number_of_edges: Exact number of edges to create
        rng: Random generator to draw from
        random_seed: Seed used when rng is None
        max_attempts: Maximum number of draws (unbounded if None)

    Returns:
        Graph with exactly number_of_edges edges, all between layers

    Raises:
        InfeasibleGraphError: If an argument is negative or the edge count
            exceeds number_of_fixed_nodes * number_of_free_nodes
        GenerationError: If max_attempts draws were not enough
    """
    try:
        fixed = validate_layer_size(number_of_fixed_nodes, "number_of_fixed_nodes")
        free = validate_layer_size(number_of_free_nodes, "number_of_free_nodes")
        edges = validate_layer_size(number_of_edges, "number_of_edges")
    except ValidationError as e:
        raise InfeasibleGraphError(str(e)) from e

    maximum_edges = fixed * free
    if edges > maximum_edges:
        raise InfeasibleGraphError(
            f"Cannot place {edges} edges between {fixed} fixed and {free} free nodes "
            f"(at most {maximum_edges})"
        )
    if max_attempts is not None and max_attempts < 0:
        raise ValidationError(f"max_attempts must be >= 0, got {max_attempts}")

    graph = OcmGraph(fixed, free)
    generator = _make_rng(rng, random_seed)
    attempts = 0

    while graph.number_of_edges < edges:
        if max_attempts is not None and attempts >= max_attempts:
            raise GenerationError(
                f"Gave up after {attempts} attempts with {graph.number_of_edges} "
                f"of {edges} edges placed"
            )
        attempts += 1
        fixed_node = generator.randrange(fixed)
        free_node = generator.randrange(fixed, fixed + free)
        graph.add_edge(free_node, fixed_node)

    return graph


__all__ = [
    "build_no_crossing_graph",
    "build_random_graph",
]
