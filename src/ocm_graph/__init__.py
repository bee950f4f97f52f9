"""
ocm-graph: Input graphs for One-sided Crossing Minimization.

A two-layer bipartite graph with a fixed layer in a given order and a
free layer whose order is variable, together with routines that count
edge crossings for a free-layer ordering and builders that create
graphs randomly or from PACE ``.gr`` files.
"""

__version__ = "0.1.0"

# Graph construction
from .builders import (
    PaceHeader,
    ParseError,
    build_from_file,
    build_no_crossing_graph,
    build_random_graph,
    parse_pace,
    read_pace,
    to_pace,
    write_pace,
)

# Crossing metrics
from .crossings import (
    count_crossings_sweep,
    crossing_lower_bound,
    crossing_matrix,
    crossings_from_matrix,
)

# Core graph type
from .graph import OcmGraph

# Validation
from .validation import (
    GenerationError,
    GraphStructureWarning,
    InfeasibleGraphError,
    InvalidGraphSizeError,
    InvalidOrderingError,
    NodeIndexError,
    ValidationError,
)

__all__ = [
    # Version
    "__version__",
    # Graph
    "OcmGraph",
    # Builders
    "build_no_crossing_graph",
    "build_random_graph",
    "build_from_file",
    "parse_pace",
    "read_pace",
    "to_pace",
    "write_pace",
    "PaceHeader",
    # Crossing metrics
    "count_crossings_sweep",
    "crossing_matrix",
    "crossings_from_matrix",
    "crossing_lower_bound",
    # Errors
    "ValidationError",
    "InvalidGraphSizeError",
    "InvalidOrderingError",
    "InfeasibleGraphError",
    "NodeIndexError",
    "GenerationError",
    "ParseError",
    "GraphStructureWarning",
]
