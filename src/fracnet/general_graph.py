from __future__ import annotations

import re
from pathlib import Path
from typing import IO, Iterable, Set, Tuple, Union

from .dsu import FastDSU

_SPLIT = re.compile(r"[ \t]")


class EdgeListFormatError(ValueError):
    """Malformed data line in an edge-list stream."""


def _parse_endpoint(token: str, lineno: int, line: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise EdgeListFormatError(
            f"line {lineno}: expected a non-negative integer, got {token!r} in {line!r}"
        )
    return int(token)


class GeneralUndiGraph:
    """Undirected graph on arbitrary non-negative integer labels.

    This is the ingestion representation: edges arrive one by one and are
    stored as canonical ``(min, max)`` pairs in a set, self-loops dropped.
    Convert to ``NormalUndiGraph`` for numeric work.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.nodes: Set[int] = set()
        self.edges: Set[Tuple[int, int]] = set()

    def num_nodes(self) -> int:
        return len(self.nodes)

    def num_edges(self) -> int:
        return len(self.edges)

    def add_edge(self, u: int, v: int) -> None:
        if u == v:
            return
        self.nodes.add(u)
        self.nodes.add(v)
        if u < v:
            self.edges.add((u, v))
        else:
            self.edges.add((v, u))

    @classmethod
    def from_lines(cls, name: str, lines: Iterable[str]) -> "GeneralUndiGraph":
        """Build a graph from edge-list lines.

        Lines starting with ``#`` or ``%`` are comments. Every other line must
        carry at least two space/tab separated non-negative integers; any
        further tokens (weights, timestamps) are ignored.

        Raises
        ------
        EdgeListFormatError
            On a data line with fewer than two tokens or a non-integer token.
        """
        g = cls(name)
        for lineno, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            if line.startswith("#") or line.startswith("%"):
                continue
            tokens = _SPLIT.split(line)
            if len(tokens) < 2:
                raise EdgeListFormatError(
                    f"line {lineno}: expected two endpoints, got {line!r}"
                )
            u = _parse_endpoint(tokens[0], lineno, line)
            v = _parse_endpoint(tokens[1], lineno, line)
            g.add_edge(u, v)
        return g

    @classmethod
    def from_file(cls, name: str, source: Union[str, Path, IO[str]]) -> "GeneralUndiGraph":
        """Read an edge list from a path or an already opened text handle."""
        if isinstance(source, (str, Path)):
            with open(source, "r", encoding="utf-8") as f:
                return cls.from_lines(name, f)
        return cls.from_lines(name, source)

    @classmethod
    def from_konect(cls, name: str, internal_name: str) -> "GeneralUndiGraph":
        """Download and parse a KONECT dataset (see ``fracnet.konect``)."""
        from .konect import load_konect

        return load_konect(name, internal_name)

    def lcc(self) -> "GeneralUndiGraph":
        """Largest connected component.

        The graph is consumed: do not keep using `self` afterwards. When
        several components share the largest size, which one survives is
        unspecified.
        """
        dsu = FastDSU()
        for u in self.nodes:
            dsu.add(u)
        for u, v in self.edges:
            dsu.union(u, v)
        rmap = dsu.retain_map()

        out = GeneralUndiGraph(self.name)
        out.nodes = {u for u in self.nodes if rmap[u]}
        out.edges = {(u, v) for (u, v) in self.edges if rmap[u] and rmap[v]}
        self.nodes = set()
        self.edges = set()
        return out

    def write(self, target: Union[str, Path, IO[str]]) -> None:
        if isinstance(target, (str, Path)):
            with open(target, "w", encoding="utf-8") as f:
                f.write(str(self))
        else:
            target.write(str(self))

    def __str__(self) -> str:
        parts = [
            f"# GeneralUndiGraph: {self.name}\n",
            f"# Nodes: {self.num_nodes()} Edges: {self.num_edges()}\n",
        ]
        parts.extend(f"{u}\t{v}\n" for u, v in sorted(self.edges))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"GeneralUndiGraph(name={self.name!r}, n={self.num_nodes()}, m={self.num_edges()})"
