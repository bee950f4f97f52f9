"""
PACE ``.gr`` format for OCM graphs.

Reads and writes the plain-text format used for one-sided crossing
minimization instances::

    c optional comment lines
    p ocr <fixed> <free> <edges>
    <fixed> <free>

Node numbers are 1-indexed. With ``numbering="layer"`` (the default)
each edge line names a fixed node in 1..F and a free node in 1..R,
each counted within its own layer. With ``numbering="global"`` both
numbers run over all nodes, fixed 1..F then free F+1..F+R, as in the
PACE 2024 challenge files. Blank lines and lines starting with ``c``
may appear anywhere.
"""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass
from os import PathLike
from typing import Iterable, Iterator, Literal, Optional, Sequence, Union

from ..graph import OcmGraph
from ..validation import GraphStructureWarning, NodeIndexError, ValidationError

PathType = Union[str, "PathLike[str]"]
Numbering = Literal["layer", "global"]

_UNSIGNED = re.compile(r"[0-9]+")


class ParseError(ValueError):
    """Raised when a PACE description is malformed."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class PaceHeader:
    """Contents of the ``p`` line."""

    descriptor: str
    number_of_fixed_nodes: int
    number_of_free_nodes: int
    number_of_edges: int


def _validate_numbering(numbering: str) -> None:
    if numbering not in ("layer", "global"):
        raise ValidationError(f"numbering must be 'layer' or 'global', got {numbering!r}")


def _is_skipped(line: str) -> bool:
    return not line or line.startswith("c")


def _to_int(word: str, what: str, line: str, line_number: int) -> int:
    """Convert an unsigned decimal field, reporting failures as ParseError."""
    if not _UNSIGNED.fullmatch(word):
        raise ParseError(f"invalid {what} {word!r} in {line!r}", line_number)
    try:
        return int(word)
    except ValueError as e:
        # More digits than int() accepts
        raise ParseError(f"{what} has {len(word)} digits, too many to convert", line_number) from e


def _parse_header(line: str, line_number: int) -> PaceHeader:
    """Parse ``p <descriptor> <fixed> <free> <edges>``."""
    words = line.split()
    if words[0] != "p":
        raise ParseError(f"expected the 'p' header line, got {line!r}", line_number)
    if len(words) != 5:
        raise ParseError(f"header must have 5 fields, got {len(words)}: {line!r}", line_number)

    fixed, free, edges = (_to_int(word, "count", line, line_number) for word in words[2:])
    return PaceHeader(words[1], fixed, free, edges)


def _parse_edge(line: str, line_number: int) -> tuple[int, int]:
    """Parse ``<u> <v>`` into two positive node numbers."""
    words = line.split()
    if len(words) != 2:
        raise ParseError(f"edge line must have 2 fields, got {len(words)}: {line!r}", line_number)

    u, v = (_to_int(word, "node number", line, line_number) for word in words)
    for word, number in zip(words, (u, v)):
        if number < 1:
            raise ParseError(f"invalid node number {word!r} in {line!r}", line_number)

    return u, v


def _add_layer_edge(graph: OcmGraph, fixed: int, free: int, line_number: int) -> None:
    """Insert an edge given as layer-local fixed and free numbers."""
    if fixed > graph.number_of_fixed_nodes:
        raise ParseError(
            f"fixed node {fixed} exceeds the {graph.number_of_fixed_nodes} declared fixed nodes",
            line_number,
        )
    if free > graph.number_of_free_nodes:
        raise ParseError(
            f"free node {free} exceeds the {graph.number_of_free_nodes} declared free nodes",
            line_number,
        )
    graph.add_edge(fixed - 1, graph.number_of_fixed_nodes + free - 1)


def _add_global_edge(graph: OcmGraph, u: int, v: int, line_number: int) -> None:
    """Insert an edge given as global node numbers."""
    try:
        graph.add_edge(u - 1, v - 1)
    except NodeIndexError as e:
        raise ParseError(
            f"node {max(u, v)} exceeds the {graph.number_of_nodes} declared nodes",
            line_number,
        ) from e

    if graph.is_fixed(u - 1) == graph.is_fixed(v - 1):
        warnings.warn(
            f"Edge {u} {v} on line {line_number} does not connect the fixed "
            "and the free layer; crossing counts may be meaningless.",
            GraphStructureWarning,
            stacklevel=3,
        )


def read_pace(lines: Iterable[str], *, numbering: Numbering = "layer") -> OcmGraph:
    """
    Build a graph from the lines of a PACE description.

    Args:
        lines: Text lines, e.g. an open file
        numbering: "layer" for per-layer edge numbers, "global" for numbers
            running over both layers

    Returns:
        Graph with the declared layer sizes and edges

    Raises:
        ParseError: If the header is missing or malformed, an edge line is
            malformed or out of range, or the edge count differs from the
            declared one
    """
    _validate_numbering(numbering)
    header: Optional[PaceHeader] = None
    graph: Optional[OcmGraph] = None

    for line_number, raw in enumerate(lines, start=1):
        line = raw.strip()
        if _is_skipped(line):
            continue

        if header is None or graph is None:
            header = _parse_header(line, line_number)
            graph = OcmGraph(header.number_of_fixed_nodes, header.number_of_free_nodes)
            continue

        u, v = _parse_edge(line, line_number)
        if numbering == "layer":
            _add_layer_edge(graph, u, v, line_number)
        else:
            _add_global_edge(graph, u, v, line_number)

    if header is None or graph is None:
        raise ParseError("could not find a 'p' header line")

    if graph.number_of_edges != header.number_of_edges:
        raise ParseError(
            f"the number of edges is invalid: {header.number_of_edges} were expected, "
            f"but {graph.number_of_edges} were found"
        )

    return graph


def parse_pace(text: str, *, numbering: Numbering = "layer") -> OcmGraph:
    """Build a graph from a PACE description held in a string."""
    return read_pace(text.splitlines(), numbering=numbering)


def _decode_lines(lines: Iterable[bytes]) -> Iterator[str]:
    """Decode UTF-8 lines, reporting undecodable bytes as ParseError."""
    for line_number, raw in enumerate(lines, start=1):
        try:
            yield raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"invalid UTF-8 at byte {e.start}: {e.reason}", line_number) from e


def build_from_file(path: PathType, *, numbering: Numbering = "layer") -> OcmGraph:
    """
    Build a graph from a PACE ``.gr`` file.

    Args:
        path: File to read
        numbering: Edge numbering scheme, see ``read_pace``

    Returns:
        The parsed graph

    Raises:
        OSError: If the file cannot be opened or read
        ParseError: If the contents are malformed or not UTF-8
    """
    with open(path, "rb") as f:
        return read_pace(_decode_lines(f), numbering=numbering)


def to_pace(
    graph: OcmGraph,
    *,
    descriptor: str = "ocr",
    numbering: Numbering = "layer",
    comments: Sequence[str] = (),
) -> str:
    """
    Export a graph to the PACE format.

    Args:
        graph: Graph to export
        descriptor: Problem descriptor in the header (default "ocr")
        numbering: Edge numbering scheme, see ``read_pace``
        comments: Lines written as ``c`` comments before the header

    Returns:
        PACE format string, one edge per line in ascending order

    Raises:
        ValidationError: If the descriptor is not a single word, or a
            same-layer edge cannot be written with layer numbering
    """
    _validate_numbering(numbering)
    words = descriptor.split()
    if len(words) != 1 or words[0] != descriptor:
        raise ValidationError(f"descriptor must be a single word, got {descriptor!r}")

    lines = []
    for comment in comments:
        for part in comment.splitlines() or [""]:
            lines.append(f"c {part}".rstrip())

    lines.append(
        f"p {descriptor} {graph.number_of_fixed_nodes} "
        f"{graph.number_of_free_nodes} {graph.number_of_edges}"
    )

    first_free = graph.number_of_fixed_nodes
    for u, v in graph.edges():
        if numbering == "global":
            lines.append(f"{u + 1} {v + 1}")
        elif u < first_free <= v:
            lines.append(f"{u + 1} {v - first_free + 1}")
        else:
            raise ValidationError(
                f"Edge ({u}, {v}) lies within one layer and has no layer numbering"
            )

    return "\n".join(lines) + "\n"


def write_pace(
    graph: OcmGraph,
    path: PathType,
    *,
    descriptor: str = "ocr",
    numbering: Numbering = "layer",
    comments: Sequence[str] = (),
) -> None:
    """Write a graph to a PACE ``.gr`` file."""
    text = to_pace(graph, descriptor=descriptor, numbering=numbering, comments=comments)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


__all__ = [
    "ParseError",
    "PaceHeader",
    "read_pace",
    "parse_pace",
    "build_from_file",
    "to_pace",
    "write_pace",
]
