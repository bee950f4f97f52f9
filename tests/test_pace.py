"""Tests for reading and writing the PACE .gr format."""

import pytest

from ocm_graph import (
    GraphStructureWarning,
    OcmGraph,
    ParseError,
    ValidationError,
    build_from_file,
    build_no_crossing_graph,
    build_random_graph,
    parse_pace,
    read_pace,
    to_pace,
    write_pace,
)

# =============================================================================
# Fixtures
# =============================================================================

K22 = """\
p ocm 2 2 4
1 1
1 2
2 1
2 2
"""


@pytest.fixture
def k22_file(tmp_path):
    """K(2, 2) written to a .gr file."""
    path = tmp_path / "k22.gr"
    path.write_text(K22)
    return path


# =============================================================================
# Reading
# =============================================================================


class TestReadPace:
    """Parsing valid descriptions."""

    def test_complete_bipartite(self, k22_file):
        """K(2, 2) parses with four edges and one default crossing."""
        graph = build_from_file(k22_file)

        assert graph.number_of_fixed_nodes == 2
        assert graph.number_of_free_nodes == 2
        assert graph.number_of_edges == 4
        assert list(graph.edges()) == [(0, 2), (0, 3), (1, 2), (1, 3)]
        assert graph.compute_crossings_default_ordering() == 1

    def test_accepts_str_path(self, k22_file):
        """Paths may be given as strings."""
        assert build_from_file(str(k22_file)).number_of_edges == 4

    def test_comments_and_blank_lines(self):
        """Comment and blank lines are skipped before and after the header."""
        text = "c instance\n\nc more\np ocr 1 2 2\nc between\n1 1\n\n1 2\n"
        graph = parse_pace(text)
        assert graph.neighbors(0) == [1, 2]

    def test_extra_whitespace(self):
        """Fields may be separated by any whitespace."""
        graph = parse_pace("p  ocr\t1 1 1\n  1\t 1  \n")
        assert graph.does_edge_exist(0, 1)

    def test_no_edges(self):
        """A header alone describes an edgeless graph."""
        graph = parse_pace("p ocr 3 2 0\n")
        assert graph.number_of_nodes == 5
        assert graph.number_of_edges == 0

    def test_read_from_lines(self):
        """Any iterable of lines can be read."""
        graph = read_pace(["p ocr 1 1 1", "1 1"])
        assert graph.number_of_edges == 1

    def test_global_numbering(self):
        """Global numbering addresses free nodes after the fixed ones."""
        graph = parse_pace("p ocr 2 2 4\n1 3\n1 4\n2 3\n4 2\n", numbering="global")
        assert list(graph.edges()) == [(0, 2), (0, 3), (1, 2), (1, 3)]
        assert graph.compute_crossings_default_ordering() == 1

    def test_global_same_layer_warns(self):
        """A same-layer edge is kept but reported."""
        with pytest.warns(GraphStructureWarning, match="does not connect"):
            graph = parse_pace("p ocr 2 1 1\n1 2\n", numbering="global")
        assert graph.does_edge_exist(0, 1)

    def test_unknown_numbering_raises(self):
        """Only 'layer' and 'global' are accepted."""
        with pytest.raises(ValidationError, match="numbering"):
            parse_pace("p ocr 1 1 0\n", numbering="local")


class TestReadPaceErrors:
    """Parsing malformed descriptions."""

    def test_edge_count_mismatch(self):
        """Declaring 3 edges but listing 4 fails."""
        text = K22.replace("p ocm 2 2 4", "p ocm 2 2 3")
        with pytest.raises(ParseError, match="3 were expected, but 4 were found"):
            parse_pace(text)

    def test_duplicate_edges_count_once(self):
        """Duplicate edge lines make the declared count unreachable."""
        with pytest.raises(ParseError, match="2 were expected, but 1 were found"):
            parse_pace("p ocr 1 1 2\n1 1\n1 1\n")

    def test_missing_header(self):
        """A file with only comments has no header."""
        with pytest.raises(ParseError, match="'p' header") as info:
            parse_pace("c nothing here\n\n")
        assert info.value.line_number is None

    def test_empty_input(self):
        """Empty input has no header."""
        with pytest.raises(ParseError):
            parse_pace("")

    def test_edge_before_header(self):
        """The first content line must be the header."""
        with pytest.raises(ParseError, match="line 2: expected the 'p' header") as info:
            parse_pace("c x\n1 2\np ocr 1 2 1\n")
        assert info.value.line_number == 2

    @pytest.mark.parametrize(
        "header",
        [
            "p ocr 2 2",
            "p ocr 2 2 4 5",
            "p ocr two 2 4",
            "p ocr 2 -2 4",
            "p ocr 2 2 4.0",
            "pp ocr 2 2 4",
        ],
    )
    def test_malformed_header(self, header):
        """Headers need 'p', a descriptor and three unsigned counts."""
        with pytest.raises(ParseError, match="line 1"):
            parse_pace(header + "\n")

    @pytest.mark.parametrize("edge", ["1", "1 2 3", "a 1", "1 -1", "0 1", "1 0", "1.0 1"])
    def test_malformed_edge_line(self, edge):
        """Edge lines need two positive integers."""
        with pytest.raises(ParseError, match="line 2"):
            parse_pace(f"p ocr 2 2 1\n{edge}\n")

    def test_second_header_is_malformed_edge(self):
        """Only one header line is allowed."""
        with pytest.raises(ParseError, match="line 2"):
            parse_pace("p ocr 1 1 0\np ocr 1 1 0\n")

    def test_fixed_out_of_range(self):
        """Fixed numbers beyond the fixed layer fail."""
        with pytest.raises(ParseError, match="fixed node 3 exceeds"):
            parse_pace("p ocr 2 2 1\n3 1\n")

    def test_free_out_of_range(self):
        """Free numbers beyond the free layer fail."""
        with pytest.raises(ParseError, match="free node 3 exceeds"):
            parse_pace("p ocr 2 2 1\n1 3\n")

    def test_global_out_of_range(self):
        """Global numbers beyond the node count fail."""
        with pytest.raises(ParseError, match="node 5 exceeds the 4 declared nodes"):
            parse_pace("p ocr 2 2 1\n1 5\n", numbering="global")

    def test_overlong_edge_number(self):
        """A node number too long for int() is a malformed line."""
        with pytest.raises(ParseError, match="line 2: node number has 5000 digits"):
            parse_pace("p ocr 1 1 1\n1 " + "9" * 5000 + "\n")

    def test_overlong_header_count(self):
        """A header count too long for int() is a malformed header."""
        with pytest.raises(ParseError, match="line 1: count has 5000 digits"):
            parse_pace("p ocr 1 1 " + "9" * 5000 + "\n")

    def test_invalid_utf8_file(self, tmp_path):
        """Undecodable bytes are reported as ParseError with their line."""
        path = tmp_path / "binary.gr"
        path.write_bytes(b"p ocr 1 1 1\n\xff\xfe 1\n")
        with pytest.raises(ParseError, match="line 2: invalid UTF-8") as info:
            build_from_file(path)
        assert info.value.line_number == 2
        assert isinstance(info.value.__cause__, UnicodeDecodeError)

    def test_crlf_file(self, tmp_path):
        """Windows line endings are accepted."""
        path = tmp_path / "crlf.gr"
        path.write_bytes(b"c x\r\np ocr 1 1 1\r\n1 1\r\n")
        assert build_from_file(path).number_of_edges == 1

    def test_huge_declared_sizes(self):
        """Declared layer sizes do not allocate per-node storage."""
        graph = parse_pace("p ocr 10000000000 10000000000 1\n10000000000 1\n")
        assert graph.number_of_nodes == 20_000_000_000
        assert list(graph.edges()) == [(9_999_999_999, 10_000_000_000)]

    def test_parse_error_is_value_error(self):
        """ParseError can be caught as ValueError."""
        with pytest.raises(ValueError):
            parse_pace("nonsense")

    def test_missing_file(self, tmp_path):
        """Unreadable files raise the OS error, not ParseError."""
        with pytest.raises(FileNotFoundError):
            build_from_file(tmp_path / "missing.gr")

    def test_directory_is_os_error(self, tmp_path):
        """Opening a directory surfaces as OSError."""
        with pytest.raises(OSError):
            build_from_file(tmp_path)


# =============================================================================
# Writing
# =============================================================================


class TestWritePace:
    """Serialising graphs."""

    def test_to_pace_layer_numbering(self):
        """Edges are written as layer-local fixed and free numbers."""
        graph = OcmGraph(2, 2)
        graph.add_edges([(1, 2), (0, 3)])
        assert to_pace(graph) == "p ocr 2 2 2\n1 2\n2 1\n"

    def test_to_pace_global_numbering(self):
        """Global numbering writes graph indices plus one."""
        graph = OcmGraph(2, 2)
        graph.add_edges([(1, 2), (0, 3)])
        assert to_pace(graph, numbering="global") == "p ocr 2 2 2\n1 4\n2 3\n"

    def test_comments_and_descriptor(self):
        """Comments precede the header."""
        graph = OcmGraph(1, 1)
        text = to_pace(graph, descriptor="ocm", comments=["seed 1", "a\nb"])
        assert text == "c seed 1\nc a\nc b\np ocm 1 1 0\n"

    def test_bad_descriptor_raises(self):
        """Descriptors must be one word."""
        with pytest.raises(ValidationError, match="single word"):
            to_pace(OcmGraph(1, 1), descriptor="two words")
        with pytest.raises(ValidationError):
            to_pace(OcmGraph(1, 1), descriptor="")

    def test_same_layer_edge_needs_global(self):
        """Layer numbering cannot express a same-layer edge."""
        graph = OcmGraph(2, 1)
        graph.add_edge(0, 1)
        with pytest.raises(ValidationError, match="within one layer"):
            to_pace(graph)
        assert to_pace(graph, numbering="global") == "p ocr 2 1 1\n1 2\n"

    @pytest.mark.parametrize("numbering", ["layer", "global"])
    def test_round_trip(self, tmp_path, numbering):
        """Writing then reading preserves sizes and edges."""
        graph = build_random_graph(6, 8, 20, random_seed=3)
        path = tmp_path / "random.gr"
        write_pace(graph, path, numbering=numbering, comments=["generated"])

        loaded = build_from_file(path, numbering=numbering)
        assert loaded.number_of_fixed_nodes == 6
        assert loaded.number_of_free_nodes == 8
        assert list(loaded.edges()) == list(graph.edges())

    def test_round_trip_keeps_witness(self):
        """A no-crossing instance stays crossing-free after a round trip."""
        graph, ordering = build_no_crossing_graph(9, random_seed=4)
        loaded = parse_pace(to_pace(graph))
        assert loaded.compute_crossings_for_ordering(ordering) == 0
