"""Undirected graph construction for network-science experiments.

This package provides:
- union-find structures (generic `DSU`, size-balanced `FastDSU`),
- an ingestion graph built from edge lists, with largest-connected-component extraction,
- a compact 0..n-1 graph with sorted adjacency and dense/sparse matrix export,
- deterministic generators for Apollonian, Koch and (extended) pseudofractal networks,
- KONECT dataset download.
"""

from .dsu import DSU, FastDSU
from .general_graph import GeneralUndiGraph, EdgeListFormatError
from .normal_graph import NormalUndiGraph
from .konect import KonectError, load_konect

__all__ = [
    "DSU",
    "FastDSU",
    "GeneralUndiGraph",
    "EdgeListFormatError",
    "NormalUndiGraph",
    "KonectError",
    "load_konect",
]
