"""
Graph construction.

Builders that produce populated ``OcmGraph`` instances:

- build_no_crossing_graph: caterpillar graph with a zero-crossing witness
- build_random_graph: uniformly random fixed-free edges
- build_from_file / parse_pace / read_pace: PACE ``.gr`` descriptions
- to_pace / write_pace: the same format, written back out
"""

from .generators import build_no_crossing_graph, build_random_graph
from .pace import (
    PaceHeader,
    ParseError,
    build_from_file,
    parse_pace,
    read_pace,
    to_pace,
    write_pace,
)

__all__ = [
    "build_no_crossing_graph",
    "build_random_graph",
    "ParseError",
    "PaceHeader",
    "build_from_file",
    "parse_pace",
    "read_pace",
    "to_pace",
    "write_pace",
]
