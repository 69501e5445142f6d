"""Tests for fracnet/general_graph.py"""

import io

import pytest
from fracnet.general_graph import EdgeListFormatError, GeneralUndiGraph


def _graph(edges, name="g"):
    g = GeneralUndiGraph(name)
    for u, v in edges:
        g.add_edge(u, v)
    return g


class TestAddEdge:
    def test_self_loop_ignored(self):
        g = _graph([(0, 1)])
        for u in (0, 1, 5):
            g.add_edge(u, u)
        assert g.edges == {(0, 1)}
        assert g.nodes == {0, 1}

    def test_canonical_form(self):
        g = GeneralUndiGraph("g")
        g.add_edge(1, 2)
        g.add_edge(2, 1)
        assert g.edges == {(1, 2)}
        assert g.num_edges() == 1
        assert g.num_nodes() == 2

    def test_reversed_insert_is_canonical(self):
        g = _graph([(9, 3)])
        assert g.edges == {(3, 9)}


class TestParsing:
    def test_comments_and_trailing_tokens(self):
        lines = [
            "% sym unweighted\n",
            "# a comment\n",
            "1 2\n",
            "2\t3 1 1234567\n",
            "3 1\n",
        ]
        g = GeneralUndiGraph.from_lines("tri", lines)
        assert g.name == "tri"
        assert g.nodes == {1, 2, 3}
        assert g.edges == {(1, 2), (2, 3), (1, 3)}

    def test_from_handle(self):
        g = GeneralUndiGraph.from_file("h", io.StringIO("0 1\n0 2\n0 3\n1 3\n"))
        assert g.num_nodes() == 4
        assert g.num_edges() == 4

    def test_from_path(self, tmp_path):
        path = tmp_path / "edges.txt"
        path.write_text("# header\n5 7\n7 5\n7 7\n")
        g = GeneralUndiGraph.from_file("p", path)
        assert g.edges == {(5, 7)}

    @pytest.mark.parametrize("line", ["1\n", "1 x\n", "-1 2\n", "1.5 2\n", "\n"])
    def test_malformed_line_raises(self, line):
        with pytest.raises(EdgeListFormatError, match="line 2"):
            GeneralUndiGraph.from_lines("bad", ["0 1\n", line])

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            GeneralUndiGraph.from_lines("bad", ["a b\n"])


class TestLCC:
    def test_two_triangles(self):
        g = _graph([(0, 1), (1, 2), (0, 2), (3, 4), (4, 5), (3, 5)])
        h = g.lcc()
        assert h.num_nodes() == 3
        assert h.num_edges() == 3
        assert h.nodes in ({0, 1, 2}, {3, 4, 5})

    def test_keeps_largest(self):
        g = _graph([(0, 1), (10, 11), (11, 12), (12, 13), (20, 21), (21, 22)])
        h = g.lcc()
        assert h.nodes == {10, 11, 12, 13}
        assert h.edges == {(10, 11), (11, 12), (12, 13)}
        assert h.name == g.name

    def test_connected_graph_unchanged(self):
        edges = {(0, 1), (1, 2), (2, 3), (0, 3)}
        h = _graph(edges).lcc()
        assert h.edges == edges

    def test_empty(self):
        h = GeneralUndiGraph("empty").lcc()
        assert h.num_nodes() == 0
        assert h.num_edges() == 0


class TestOutput:
    def test_str_sorted(self):
        g = _graph([(3, 1), (0, 2), (1, 0)], name="toy")
        assert str(g) == (
            "# GeneralUndiGraph: toy\n"
            "# Nodes: 4 Edges: 3\n"
            "0\t1\n"
            "0\t2\n"
            "1\t3\n"
        )

    def test_write_roundtrip(self, tmp_path):
        g = _graph([(4, 8), (8, 15), (15, 16)], name="lost")
        path = tmp_path / "out.txt"
        g.write(path)
        h = GeneralUndiGraph.from_file("lost", path)
        assert h.edges == g.edges
