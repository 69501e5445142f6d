from __future__ import annotations

from bisect import bisect_right
from pathlib import Path
from typing import IO, Dict, Iterator, List, Tuple, Union

import numpy as np
from scipy import sparse

from .general_graph import GeneralUndiGraph


def _adjs_from_edges(n: int, src: np.ndarray, dst: np.ndarray) -> List[List[int]]:
    """Sorted adjacency lists of an undirected edge list.

    Both directions are bucketed by head (offsets from the degree counts) and
    sorted by tail, so every list comes out ascending.
    """
    if n == 0:
        return []
    heads = np.concatenate([src, dst]).astype(np.int64, copy=False)
    tails = np.concatenate([dst, src]).astype(np.int64, copy=False)
    order = np.lexsort((tails, heads))
    tails = tails[order]
    degs = np.bincount(heads, minlength=n)
    offsets = np.cumsum(degs)[:-1]
    return [row.tolist() for row in np.split(tails, offsets)]


def _check_generations(g: int) -> int:
    g = int(g)
    if g < 0:
        raise ValueError(f"generations must be >= 0, got {g}")
    return g


class NormalUndiGraph:
    """Undirected graph on nodes ``0..n-1`` with sorted adjacency lists.

    This is the simulation representation: built once, either from a
    ``GeneralUndiGraph`` or by one of the ``from_*`` generators, and never
    modified afterwards.
    """

    def __init__(self, name: str, n: int, m: int, adjs: List[List[int]]) -> None:
        self.name = name
        self.n = n
        self.m = m
        self.adjs = adjs

    # ------------------------------------------------------------------
    # queries

    def degrees(self) -> np.ndarray:
        return np.fromiter((len(adj) for adj in self.adjs), dtype=np.int64, count=self.n)

    def neighbors_above(self, u: int) -> List[int]:
        """Neighbors of `u` with a larger id (a suffix of the sorted list)."""
        adj = self.adjs[u]
        return adj[bisect_right(adj, u):]

    def edges(self) -> Iterator[Tuple[int, int]]:
        """Each edge once, as ``(u, v)`` with ``u < v``, in adjacency order."""
        for u in range(self.n):
            for v in self.neighbors_above(u):
                yield u, v

    def edge_array(self) -> np.ndarray:
        out = np.empty((self.m, 2), dtype=np.int64)
        for i, (u, v) in enumerate(self.edges()):
            out[i] = (u, v)
        return out

    # ------------------------------------------------------------------
    # numeric materialization

    def diag_adj(self) -> Tuple[np.ndarray, np.ndarray]:
        """Degree vector and dense symmetric adjacency matrix (float64).

        ``np.diag(d) - A`` is the graph Laplacian.
        """
        diag = self.degrees().astype(np.float64)
        adj = np.zeros((self.n, self.n), dtype=np.float64)
        e = self.edge_array()
        if len(e):
            np.add.at(adj, (e[:, 0], e[:, 1]), 1.0)
            np.add.at(adj, (e[:, 1], e[:, 0]), 1.0)
        return diag, adj

    def laplacian(self) -> np.ndarray:
        diag, adj = self.diag_adj()
        return np.diag(diag) - adj

    def adjacency_csr(self) -> sparse.csr_matrix:
        """Sparse symmetric 0/1 adjacency matrix."""
        e = self.edge_array()
        rows = np.concatenate([e[:, 0], e[:, 1]])
        cols = np.concatenate([e[:, 1], e[:, 0]])
        data = np.ones(len(rows), dtype=np.float64)
        return sparse.csr_matrix((data, (rows, cols)), shape=(self.n, self.n), dtype=np.float64)

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def from_general(cls, g: GeneralUndiGraph) -> "NormalUndiGraph":
        """Compact copy of `g`.

        Labels are kept as ids when they are exactly ``0..n-1`` (then
        ``max + 1 == n``). Otherwise nodes are renumbered in order of first
        appearance while walking the edges in sorted order.
        """
        n = g.num_nodes()
        if n == 0:
            return cls("EmptyGraph", 0, 0, [])

        edges = sorted(g.edges)
        renumber = max(g.nodes) + 1 != n
        if renumber:
            o2n: Dict[int, int] = {}
            for u, v in edges:
                if u not in o2n:
                    o2n[u] = len(o2n)
                if v not in o2n:
                    o2n[v] = len(o2n)
            # nodes without edges still need an id
            for u in sorted(g.nodes):
                if u not in o2n:
                    o2n[u] = len(o2n)
            edges = [(o2n[u], o2n[v]) for u, v in edges]

        e = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
        adjs = _adjs_from_edges(n, e[:, 0], e[:, 1])
        return cls(g.name, n, g.num_edges(), adjs)

    @classmethod
    def from_apollo(cls, g: int) -> "NormalUndiGraph":
        """Apollonian network after `g` generations.

        Starts from K4 with its four faces active. Every generation puts a
        new node inside each active face (x, y, z), joins it to the three
        corners and replaces the face with (x, y, new), (x, z, new),
        (y, z, new).
        """
        g = _check_generations(g)
        grown = 4 * (3 ** g - 1) // 2
        m_total = 6 + 3 * grown

        src = np.empty(m_total, dtype=np.int64)
        dst = np.empty(m_total, dtype=np.int64)
        src[:6] = (0, 0, 0, 1, 1, 2)
        dst[:6] = (1, 2, 3, 2, 3, 3)

        faces = np.array([(0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3)], dtype=np.int64)
        n, m = 4, 6
        for _ in range(g):
            k = len(faces)
            new = np.arange(n, n + k, dtype=np.int64)
            src[m:m + 3 * k] = faces.reshape(-1)
            dst[m:m + 3 * k] = np.repeat(new, 3)
            x, y, z = faces[:, 0], faces[:, 1], faces[:, 2]
            faces = np.stack(
                [
                    np.stack([x, y, new], axis=1),
                    np.stack([x, z, new], axis=1),
                    np.stack([y, z, new], axis=1),
                ],
                axis=1,
            ).reshape(-1, 3)
            n += k
            m += 3 * k

        return cls(f"Apollo_{g}", n, m, _adjs_from_edges(n, src, dst))

    @classmethod
    def from_koch(cls, g: int, keep_parents: bool = False) -> "NormalUndiGraph":
        """Koch network after `g` generations.

        Each generation every current triangle (x, y, z) gets six new nodes
        a..f and spawns (x, a, b), (y, c, d), (z, e, f). By default the
        spawned triangles replace their parent, so 3**g triangles remain and
        ``m == 3 * 3**g``. With ``keep_parents=True`` parents stay in the graph
        and keep spawning (4**g triangles).
        """
        g = _check_generations(g)
        tris = np.array([(0, 1, 2)], dtype=np.int64)
        n = 3
        for _ in range(g):
            k = len(tris)
            base = n + 6 * np.arange(k, dtype=np.int64)
            spawned = np.stack(
                [
                    np.stack([tris[:, 0], base, base + 1], axis=1),
                    np.stack([tris[:, 1], base + 2, base + 3], axis=1),
                    np.stack([tris[:, 2], base + 4, base + 5], axis=1),
                ],
                axis=1,
            ).reshape(-1, 3)
            tris = np.concatenate([tris, spawned]) if keep_parents else spawned
            n += 6 * k

        src = np.concatenate([tris[:, 0], tris[:, 0], tris[:, 1]])
        dst = np.concatenate([tris[:, 1], tris[:, 2], tris[:, 2]])
        return cls(f"Koch_{g}", n, 3 * len(tris), _adjs_from_edges(n, src, dst))

    @classmethod
    def _from_pseudo_ext(cls, m: int, g: int, name: str) -> "NormalUndiGraph":
        m = int(m)
        if m < 1:
            raise ValueError(f"bridging nodes per edge must be >= 1, got {m}")
        g = _check_generations(g)

        growth = 2 * m + 1
        m_total = 3 * growth ** g

        src = np.empty(m_total, dtype=np.int64)
        dst = np.empty(m_total, dtype=np.int64)
        src[:3] = (0, 0, 1)
        dst[:3] = (1, 2, 2)

        n, e = 3, 3
        for _ in range(g):
            # bridges for edge i are n + i*m .. n + i*m + m-1
            bridges = n + np.arange(e * m, dtype=np.int64)
            u = np.repeat(src[:e], m)
            v = np.repeat(dst[:e], m)
            new_src = np.stack([u, v], axis=1).reshape(-1)
            new_dst = np.repeat(bridges, 2)
            src[e:e + 2 * m * e] = new_src
            dst[e:e + 2 * m * e] = new_dst
            n += e * m
            e += 2 * m * e

        return cls(name, n, e, _adjs_from_edges(n, src, dst))

    @classmethod
    def from_pseudo_ext(cls, m: int, g: int) -> "NormalUndiGraph":
        """Extended pseudofractal network: `m` bridging nodes per edge per generation."""
        return cls._from_pseudo_ext(m, g, f"PseudoExt_{m}_{g}")

    @classmethod
    def from_pseudofractal(cls, g: int) -> "NormalUndiGraph":
        return cls._from_pseudo_ext(1, g, f"Pseudofractal_{g}")

    # ------------------------------------------------------------------
    # text output

    def write(self, target: Union[str, Path, IO[str]]) -> None:
        if isinstance(target, (str, Path)):
            with open(target, "w", encoding="utf-8") as f:
                f.write(str(self))
        else:
            target.write(str(self))

    def __str__(self) -> str:
        parts = [
            f"# NormalUndiGraph: {self.name}\n",
            f"# Nodes: {self.n} Edges: {self.m}\n",
        ]
        parts.extend(f"{u}\t{v}\n" for u, v in self.edges())
        return "".join(parts)

    def __repr__(self) -> str:
        return f"NormalUndiGraph(name={self.name!r}, n={self.n}, m={self.m})"
