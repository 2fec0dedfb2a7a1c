"""Shortest-path trees and random update generation."""

from __future__ import annotations

import heapq
import math
import random
from collections.abc import Sequence
from dataclasses import dataclass

from dynsssp.graph import Adjacency, Edge

INF = math.inf


@dataclass
class ShortestPaths:
    """Distances and parent pointers of a shortest-path tree."""

    dist: list[float]
    parent: list[int]

    @classmethod
    def empty(cls, size: int) -> ShortestPaths:
        """All nodes unreached and without parent."""
        return cls([INF] * size, [-1] * size)

    def reachable(self, node: int) -> bool:
        """Whether ``node`` has a finite distance."""
        return self.dist[node] != INF

    def __len__(self) -> int:
        return len(self.dist)


def _neighbors(adj: Adjacency, node: int):
    return adj[node] if node < len(adj) else ()


def recompute_sssp(adj: Adjacency, size: int | None = None, source: int = 0) -> ShortestPaths:
    """Dijkstra from ``source`` over ``size`` nodes (default: ``len(adj)``)."""
    n = len(adj) if size is None else size
    if not 0 <= source < n:
        raise ValueError(f"source {source} outside graph of {n} nodes")
    paths = ShortestPaths.empty(n)
    dist, parent = paths.dist, paths.parent
    dist[source] = 0
    heap = [(0, source)]
    while heap:
        d, node = heapq.heappop(heap)
        if d > dist[node]:
            continue
        for nbr, weight in _neighbors(adj, node):
            candidate = d + weight
            if dist[nbr] > candidate:
                dist[nbr] = candidate
                parent[nbr] = node
                heapq.heappush(heap, (candidate, nbr))
    return paths


def simulate_updates(
    edges: Sequence[Edge],
    num_deletions: int,
    num_insertions: int,
    max_node: int,
    seed: int = 42,
) -> tuple[list[Edge], list[Edge]]:
    """Pick distinct existing edges to delete and new edges to insert.

    Inserted edges join two different nodes below ``max_node``, are not
    already present, and weigh between 1 and 10.
    """
    rng = random.Random(seed)
    if num_deletions > len(edges):
        raise ValueError(f"cannot delete {num_deletions} of {len(edges)} edges")

    used: set[int] = set()
    deletions: list[Edge] = []
    while len(deletions) < num_deletions:
        index = rng.randrange(len(edges))
        if index in used:
            continue
        used.add(index)
        deletions.append(Edge(*edges[index]))

    existing = {(u, v) for u, v, _ in edges}
    insertions: list[Edge] = []
    if num_insertions > 0:
        taken = sum(1 for u, v in existing if u != v and 0 <= u < max_node and 0 <= v < max_node)
        available = max_node * (max_node - 1) - taken
        if num_insertions > available:
            raise ValueError(f"only {max(available, 0)} new edges can be inserted")
    while len(insertions) < num_insertions:
        u = rng.randrange(max_node)
        v = rng.randrange(max_node)
        if u == v or (u, v) in existing:
            continue
        insertions.append(Edge(u, v, rng.randrange(10) + 1))
        existing.add((u, v))
    return deletions, insertions