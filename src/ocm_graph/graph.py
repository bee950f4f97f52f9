"""
Bipartite graph for the One-sided Crossing Minimization problem.

Nodes are plain integer indices. The fixed layer occupies indices
[0, number_of_fixed_nodes) in its given, unchangeable order; the free
layer occupies [number_of_fixed_nodes, number_of_nodes) and is drawn
in ascending index order unless an explicit ordering is supplied.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Sequence

from .validation import (
    validate_layer_size,
    validate_node_index,
    validate_ordering,
)

_NO_NEIGHBORS: frozenset[int] = frozenset()


class OcmGraph:
    """
    Two-layer graph with a fixed and a free layer.

    The graph grows monotonically: edges are inserted and never removed.
    Edges are undirected and stored symmetrically, so ``v`` is a neighbor
    of ``u`` exactly when ``u`` is a neighbor of ``v``.

    Edges are expected to connect a fixed node with a free node. This is
    not enforced; crossing counts are only meaningful when it holds (see
    ``has_only_cross_layer_edges``).

    Example:
        graph = OcmGraph(2, 2)  # fixed nodes 0, 1; free nodes 2, 3
        graph.add_edge(0, 3)
        graph.add_edge(1, 2)
        graph.compute_crossings_default_ordering()  # 1
        graph.compute_crossings_for_ordering([3, 2])  # 0

    Attributes:
        number_of_fixed_nodes: Size of the fixed layer
        number_of_free_nodes: Size of the free layer
        number_of_nodes: Total number of nodes
        number_of_edges: Number of distinct undirected edges inserted
    """

    def __init__(self, number_of_fixed_nodes: int, number_of_free_nodes: int) -> None:
        """
        Initialize a graph without edges.

        Args:
            number_of_fixed_nodes: Size of the fixed layer
            number_of_free_nodes: Size of the free layer

        Raises:
            InvalidGraphSizeError: If a layer size is negative
        """
        self._number_of_fixed_nodes = validate_layer_size(
            number_of_fixed_nodes, "number_of_fixed_nodes"
        )
        self._number_of_free_nodes = validate_layer_size(
            number_of_free_nodes, "number_of_free_nodes"
        )
        self._number_of_nodes = self._number_of_fixed_nodes + self._number_of_free_nodes
        self._number_of_edges = 0
        # Created on first edge, so declared sizes cost nothing up front
        self._adjacency: dict[int, set[int]] = {}

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def number_of_fixed_nodes(self) -> int:
        """Get the size of the fixed layer."""
        return self._number_of_fixed_nodes

    @property
    def number_of_free_nodes(self) -> int:
        """Get the size of the free layer."""
        return self._number_of_free_nodes

    @property
    def number_of_nodes(self) -> int:
        """Get the total number of nodes."""
        return self._number_of_nodes

    @property
    def number_of_edges(self) -> int:
        """Get the number of distinct edges."""
        return self._number_of_edges

    @property
    def fixed_nodes(self) -> range:
        """Get the index range of the fixed layer."""
        return range(0, self._number_of_fixed_nodes)

    @property
    def free_nodes(self) -> range:
        """Get the index range of the free layer."""
        return range(self._number_of_fixed_nodes, self._number_of_nodes)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_edge(self, node_index1: int, node_index2: int) -> bool:
        """
        Add an undirected edge between two nodes.

        Args:
            node_index1: First endpoint
            node_index2: Second endpoint

        Returns:
            True if the edge was inserted, False if it already existed

        Raises:
            NodeIndexError: If either index is out of bounds
        """
        u = validate_node_index(node_index1, self._number_of_nodes)
        v = validate_node_index(node_index2, self._number_of_nodes)

        if v in self._adjacency.get(u, _NO_NEIGHBORS):
            return False

        self._adjacency.setdefault(u, set()).add(v)
        self._adjacency.setdefault(v, set()).add(u)
        self._number_of_edges += 1
        return True

    def add_edges(self, edges: Iterable[tuple[int, int]]) -> int:
        """
        Add several edges.

        Every index is checked before the first insertion, so a bad pair
        leaves the graph unchanged.

        Returns:
            Number of edges that were newly inserted
        """
        pairs = [
            (
                validate_node_index(u, self._number_of_nodes),
                validate_node_index(v, self._number_of_nodes),
            )
            for u, v in edges
        ]
        return sum(1 for u, v in pairs if self.add_edge(u, v))

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def does_edge_exist(self, node_index1: int, node_index2: int) -> bool:
        """
        Check whether an edge between two nodes exists.

        Raises:
            NodeIndexError: If either index is out of bounds
        """
        u = validate_node_index(node_index1, self._number_of_nodes)
        v = validate_node_index(node_index2, self._number_of_nodes)
        return v in self._adjacency.get(u, _NO_NEIGHBORS)

    def neighbors(self, node_index: int) -> list[int]:
        """Get the neighbors of a node in ascending order."""
        u = validate_node_index(node_index, self._number_of_nodes)
        return sorted(self._adjacency.get(u, _NO_NEIGHBORS))

    def degree(self, node_index: int) -> int:
        """Get the number of neighbors of a node."""
        u = validate_node_index(node_index, self._number_of_nodes)
        return len(self._adjacency.get(u, _NO_NEIGHBORS))

    def is_fixed(self, node_index: int) -> bool:
        """Check whether a node belongs to the fixed layer."""
        return validate_node_index(node_index, self._number_of_nodes) < self._number_of_fixed_nodes

    def is_free(self, node_index: int) -> bool:
        """Check whether a node belongs to the free layer."""
        return not self.is_fixed(node_index)

    def edges(self) -> Iterator[tuple[int, int]]:
        """
        Iterate over all edges in ascending order.

        Yields:
            (u, v) pairs with u <= v, each undirected edge exactly once;
            a self loop appears as (u, u)
        """
        for u in sorted(self._adjacency):
            for v in sorted(self._adjacency[u]):
                if u <= v:
                    yield u, v

    def has_only_cross_layer_edges(self) -> bool:
        """
        Check whether every edge connects the fixed and the free layer.

        Returns:
            True if no edge lies within a single layer
        """
        fixed = self._number_of_fixed_nodes
        for u, neighbors in self._adjacency.items():
            if any((v < fixed) == (u < fixed) for v in neighbors):
                return False
        return True

    def default_ordering(self) -> list[int]:
        """Get the free nodes in ascending index order."""
        return list(self.free_nodes)

    def positions_for_ordering(self, ordering: Sequence[int]) -> dict[int, int]:
        """
        Map each free node to its position in an ordering.

        Args:
            ordering: Every free node exactly once, left to right

        Returns:
            Mapping from free node index to 0-based position

        Raises:
            InvalidOrderingError: If ordering is not a permutation of the
                free layer
        """
        return validate_ordering(ordering, self._number_of_fixed_nodes, self._number_of_free_nodes)

    # -------------------------------------------------------------------------
    # Crossing Counting
    # -------------------------------------------------------------------------

    def compute_crossings_default_ordering(self) -> int:
        """
        Count crossings with the free layer in ascending index order.

        For every pair of fixed nodes u < v, the edges (u, a) and (v, b)
        cross exactly when b < a. This is the direct definition and runs
        in O(F^2 * d^2) for F fixed nodes of average degree d; see
        ``count_crossings_sweep`` for an O(m log m) variant.

        Returns:
            Number of crossing edge pairs
        """
        crossings = 0
        connected = self._connected_fixed_nodes()

        for i, u in enumerate(connected):
            neighbors_u = self._adjacency[u]
            for v in connected[i + 1 :]:
                neighbors_v = self._adjacency[v]
                for a in neighbors_u:
                    for b in neighbors_v:
                        if b < a:
                            crossings += 1

        return crossings

    def compute_crossings_for_ordering(self, ordering: Sequence[int]) -> int:
        """
        Count crossings with the free layer drawn in a given order.

        Same pairwise definition as ``compute_crossings_default_ordering``
        but neighbors are compared by their position in ``ordering``. With
        the ascending ordering both methods agree.

        Args:
            ordering: Every free node exactly once, left to right

        Returns:
            Number of crossing edge pairs

        Raises:
            InvalidOrderingError: If ordering is not a permutation of the
                free layer
        """
        positions = self.positions_for_ordering(ordering)

        crossings = 0
        fixed = self._number_of_fixed_nodes

        # Every free node has a position; a fixed neighbor (same-layer edge)
        # sits left of the free layer, matching the default index order.
        def position(node: int) -> int:
            return positions[node] if node >= fixed else node - fixed

        neighbor_positions = [
            [position(a) for a in self._adjacency[u]] for u in self._connected_fixed_nodes()
        ]

        for i, positions_u in enumerate(neighbor_positions):
            for positions_v in neighbor_positions[i + 1 :]:
                for pos_a in positions_u:
                    for pos_b in positions_v:
                        if pos_b < pos_a:
                            crossings += 1

        return crossings

    def _connected_fixed_nodes(self) -> list[int]:
        """Fixed nodes with at least one neighbor, ascending."""
        fixed = self._number_of_fixed_nodes
        return sorted(u for u in self._adjacency if u < fixed)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(fixed={self._number_of_fixed_nodes}, "
            f"free={self._number_of_free_nodes}, edges={self._number_of_edges})"
        )


__all__ = ["OcmGraph"]
