"""Incremental repair of a shortest-path tree after edge updates."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from itertools import islice
from typing import TypeVar

from dynsssp.graph import Adjacency, Edge, remove_edge
from dynsssp.sssp import INF, ShortestPaths

T = TypeVar("T")


@dataclass
class UpdateFlags:
    """Per-node markers: touched by any update, and cut off by a deletion."""

    affected: list[bool]
    affected_del: list[bool]

    @classmethod
    def for_size(cls, size: int) -> UpdateFlags:
        return cls([False] * size, [False] * size)


def _neighbors(adj: Adjacency, node: int):
    return adj[node] if node < len(adj) else ()


def mark_subtree(node: int, adj: Adjacency, paths: ShortestPaths, flags: UpdateFlags) -> None:
    """Disconnect ``node`` and its tree descendants, marking them affected."""
    dist, parent = paths.dist, paths.parent

    def cut(target: int) -> None:
        flags.affected[target] = True
        flags.affected_del[target] = True
        dist[target] = INF
        parent[target] = -1

    cut(node)
    queue = deque([node])
    while queue:
        current = queue.popleft()
        for child, _ in _neighbors(adj, current):
            if parent[child] == current and not flags.affected_del[child]:
                cut(child)
                queue.append(child)


def process_deletions(
    adj: Adjacency, paths: ShortestPaths, deletions: Iterable[Edge], flags: UpdateFlags
) -> None:
    """Remove edges one at a time, cutting each lost tree subtree at once."""
    for u, v, _ in deletions:
        remove_edge(adj, u, v)
        if paths.parent[v] == u:
            mark_subtree(v, adj, paths, flags)


def process_deletions_batch(
    adj: Adjacency, paths: ShortestPaths, deletions: Iterable[Edge], flags: UpdateFlags
) -> None:
    """Remove all edges first, then cut every marked subtree together."""
    dist, parent = paths.dist, paths.parent
    for u, v, _ in deletions:
        remove_edge(adj, u, v)
        if parent[v] == u:
            flags.affected_del[v] = True

    queue = deque()
    for node, cut in enumerate(flags.affected_del):
        if cut:
            dist[node] = INF
            parent[node] = -1
            queue.append(node)

    while queue:
        current = queue.popleft()
        for child, _ in _neighbors(adj, current):
            if parent[child] == current and not flags.affected_del[child]:
                flags.affected_del[child] = True
                dist[child] = INF
                parent[child] = -1
                queue.append(child)

    for node, cut in enumerate(flags.affected_del):
        if cut:
            flags.affected[node] = True


def process_insertions(
    adj: Adjacency, insertions: Iterable[Edge], paths: ShortestPaths, flags: UpdateFlags
) -> None:
    """Add the inserted edges that shorten a path, updating their targets."""
    dist, parent = paths.dist, paths.parent
    for u, v, w in insertions:
        if flags.affected_del[v]:
            continue
        if dist[u] != INF and dist[u] + w < dist[v]:
            adj[u].append((v, w))
            dist[v] = dist[u] + w
            parent[v] = u
            flags.affected[v] = True


def mark_insertions(adj: Adjacency, insertions: Iterable[Edge], flags: UpdateFlags) -> None:
    """Add every inserted edge and mark its target affected."""
    for u, v, w in insertions:
        adj[u].append((v, w))
        flags.affected[v] = True


def asynchronous_serial_update(adj: Adjacency, paths: ShortestPaths, flags: UpdateFlags) -> int:
    """Relax out-edges of affected nodes until nothing changes; return the pass count."""
    dist, parent, affected = paths.dist, paths.parent, flags.affected
    iterations = 0
    changed = True
    while changed:
        changed = False
        iterations += 1
        for u in range(len(dist)):
            if not affected[u] or dist[u] == INF:
                continue
            for v, w in _neighbors(adj, u):
                if dist[v] > dist[u] + w:
                    dist[v] = dist[u] + w
                    parent[v] = u
                    affected[v] = True
                    changed = True
            affected[u] = False
    return iterations


def asynchronous_parallel_update(
    adj: Adjacency,
    paths: ShortestPaths,
    flags: UpdateFlags,
    async_depth: int,
    workers: int | None = None,
) -> int:
    """Propagate improvements from affected nodes up to ``async_depth`` hops per pass.

    Nodes are handled by a thread pool of ``workers`` threads. Returns the
    number of passes until no distance changed.
    """
    dist, parent, affected = paths.dist, paths.parent, flags.affected
    lock = threading.Lock()

    def propagate(start: int) -> bool:
        with lock:
            if not affected[start] or dist[start] == INF:
                return False
            affected[start] = False
        changed = False
        queue = deque([(start, 0)])
        while queue:
            current, depth = queue.popleft()
            for v, w in _neighbors(adj, current):
                with lock:
                    candidate = dist[current] + w
                    if dist[v] <= candidate:
                        continue
                    dist[v] = candidate
                    parent[v] = current
                    affected[v] = True
                changed = True
                if depth + 1 <= async_depth:
                    queue.append((v, depth + 1))
        return changed

    iterations = 0
    changed = True
    with ThreadPoolExecutor(max_workers=workers) as pool:
        while changed:
            iterations += 1
            changed = any(list(pool.map(propagate, range(len(dist)))))
    return iterations


def batched(items: Iterable[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive lists of at most ``size`` items."""
    if size < 1:
        raise ValueError("batch size must be at least 1")
    iterator = iter(items)
    while chunk := list(islice(iterator, size)):
        yield chunk


__all__: Sequence[str] = (
    "UpdateFlags",
    "mark_subtree",
    "process_deletions",
    "process_deletions_batch",
    "process_insertions",
    "mark_insertions",
    "asynchronous_serial_update",
    "asynchronous_parallel_update",
    "batched",
)