"""Weighted directed edge lists, adjacency lists and partition files."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from itertools import islice
from os import PathLike
from typing import NamedTuple, Union

Adjacency = list[list[tuple[int, int]]]
PathArg = Union[str, "PathLike[str]"]


class Edge(NamedTuple):
    """A directed edge from ``u`` to ``v`` with weight ``w``."""

    u: int
    v: int
    w: int


@dataclass
class Partition:
    """The part of a graph held by one rank."""

    adj: Adjacency = field(default_factory=list)
    local_nodes: set[int] = field(default_factory=set)
    boundary_nodes: set[int] = field(default_factory=set)
    max_node: int = 0
    edges: list[Edge] = field(default_factory=list)


def _check_nodes(edge: Edge) -> Edge:
    if edge.u < 0 or edge.v < 0:
        raise ValueError(f"negative node id in edge {edge}")
    return edge


def parse_edges(lines: Iterable[str]) -> list[Edge]:
    """Parse ``u v w`` lines, skipping lines that do not start with three integers."""
    edges = []
    for line in lines:
        fields = line.split()[:3]
        if len(fields) < 3:
            continue
        try:
            edge = Edge(*(int(token) for token in fields))
        except ValueError:
            continue
        edges.append(_check_nodes(edge))
    return edges


def read_weighted_edge_list(path: PathArg) -> tuple[list[Edge], int]:
    """Read an edge-list file and return its edges and the largest node id."""
    with open(path, encoding="utf-8") as handle:
        edges = parse_edges(handle)
    max_node = max((max(edge.u, edge.v) for edge in edges), default=0)
    return edges, max_node


def build_adjacency(edges: Iterable[Edge], size: int | None = None) -> Adjacency:
    """Build out-neighbour lists of ``(v, w)`` pairs for nodes ``0..size-1``."""
    edges = list(edges)
    if size is None:
        size = max((max(edge.u, edge.v) for edge in edges), default=-1) + 1
    adj: Adjacency = [[] for _ in range(size)]
    for u, v, w in edges:
        if u >= size or v >= size:
            raise ValueError(f"edge ({u}, {v}) does not fit a graph of {size} nodes")
        adj[u].append((v, w))
    return adj


def remove_edge(adj: Adjacency, u: int, v: int) -> None:
    """Remove every edge from ``u`` to ``v``."""
    adj[u][:] = [(target, weight) for target, weight in adj[u] if target != v]


def _token_edges(text: str) -> Iterator[Edge]:
    tokens = iter(text.split())
    while True:
        chunk = list(islice(tokens, 3))
        if len(chunk) < 3:
            return
        try:
            edge = Edge(*(int(token) for token in chunk))
        except ValueError:
            return
        yield _check_nodes(edge)


def load_local_partition(path: PathArg) -> Partition:
    """Load a partition file of whitespace-separated ``u v w`` triples."""
    with open(path, encoding="utf-8") as handle:
        text = handle.read()
    part = Partition()
    for edge in _token_edges(text):
        part.max_node = max(part.max_node, edge.u, edge.v)
        part.adj.extend([] for _ in range(part.max_node + 1 - len(part.adj)))
        part.adj[edge.u].append((edge.v, edge.w))
        part.edges.append(edge)
        part.local_nodes.add(edge.u)
        if edge.v not in part.local_nodes:
            part.boundary_nodes.add(edge.v)
    return part