"""Two-rank distributed repair of a shortest-path tree over partitioned graphs."""

from __future__ import annotations

import queue
import threading
import time
from collections import deque
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from dynsssp.dynamic import UpdateFlags, process_deletions, process_insertions
from dynsssp.graph import (
    Adjacency,
    Edge,
    Partition,
    PathArg,
    build_adjacency,
    load_local_partition,
    read_weighted_edge_list,
)
from dynsssp.sssp import INF, ShortestPaths, recompute_sssp, simulate_updates

_POLL_SECONDS = 0.05


class PairChannel:
    """One end of a blocking exchange between exactly two ranks."""

    def __init__(self, inbox: queue.Queue, outbox: queue.Queue, aborted: threading.Event) -> None:
        self._inbox = inbox
        self._outbox = outbox
        self._aborted = aborted

    @classmethod
    def create_pair(cls) -> tuple[PairChannel, PairChannel]:
        """Two connected ends: what one sends, the other receives."""
        first, second = queue.Queue(), queue.Queue()
        aborted = threading.Event()
        return cls(first, second, aborted), cls(second, first, aborted)

    def _abort(self) -> None:
        self._aborted.set()

    def sendrecv(self, payload: Any) -> Any:
        """Send ``payload`` to the peer and return what the peer sent."""
        self._outbox.put(payload)
        while True:
            try:
                return self._inbox.get(timeout=_POLL_SECONDS)
            except queue.Empty:
                if self._aborted.is_set():
                    raise RuntimeError("peer rank aborted") from None

    def any_changed(self, changed: bool) -> bool:
        """Whether either rank reports a change."""
        peer = self.sendrecv(bool(changed))
        return bool(changed) or bool(peer)


@dataclass
class RankResult:
    """Outcome of the dynamic update on one rank."""

    rank: int
    paths: ShortestPaths
    iterations: int
    elapsed_ms: float
    initial_ms: float | None = None


def exchange_ghost_distances(
    channel: PairChannel, boundary_nodes: Iterable[int], dist: list[float]
) -> None:
    """Swap distances of the given nodes with the peer, keeping the smaller ones."""
    outgoing = [(node, dist[node]) for node in boundary_nodes if node < len(dist)]
    for node, distance in channel.sendrecv(outgoing):
        if node < len(dist) and dist[node] > distance:
            dist[node] = distance


def _neighbors(adj: Adjacency, node: int):
    return adj[node] if node < len(adj) else ()


def async_update(
    adj: Adjacency,
    paths: ShortestPaths,
    flags: UpdateFlags,
    async_depth: int,
    local_nodes: set[int],
    channel: PairChannel,
) -> int:
    """Relax from affected local nodes, swapping distances after each pass.

    Runs until neither rank changed anything; returns the number of passes.
    """
    dist, parent, affected = paths.dist, paths.parent, flags.affected
    if len(affected) < len(dist):
        raise ValueError("update flags do not cover every node")
    iterations = 0
    changed = True
    while changed:
        iterations += 1
        changed = False
        for start in range(len(dist)):
            if not affected[start] or dist[start] == INF or start not in local_nodes:
                continue
            affected[start] = False
            pending = deque([(start, 0)])
            while pending:
                current, depth = pending.popleft()
                for v, w in _neighbors(adj, current):
                    candidate = dist[current] + w
                    if dist[v] > candidate:
                        dist[v] = candidate
                        parent[v] = current
                        affected[v] = True
                        changed = True
                        if depth + 1 <= async_depth:
                            pending.append((v, depth + 1))
        exchange_ghost_distances(channel, local_nodes, dist)
        changed = channel.any_changed(changed)
    return iterations


def run_rank(
    rank: int,
    partition: Partition,
    paths: ShortestPaths,
    deletions: Sequence[Edge],
    insertions: Sequence[Edge],
    async_depth: int,
    channel: PairChannel,
) -> RankResult:
    """Apply the updates to one rank's partition and converge with the peer."""
    size = len(paths)
    partition.adj.extend([] for _ in range(size - len(partition.adj)))
    flags = UpdateFlags.for_size(size)
    start = time.perf_counter()
    process_deletions(partition.adj, paths, deletions, flags)
    process_insertions(partition.adj, insertions, paths, flags)
    iterations = async_update(
        partition.adj, paths, flags, async_depth, partition.local_nodes, channel
    )
    elapsed_ms = (time.perf_counter() - start) * 1000
    return RankResult(rank, paths, iterations, elapsed_ms)


def run_distributed(
    partition_paths: Sequence[PathArg],
    source: int,
    async_depth: int,
    num_deletions: int,
    num_insertions: int,
    full_graph_path: PathArg | None = None,
) -> list[RankResult]:
    """Run the two-rank dynamic update over two partition files.

    Rank 0 computes the initial tree, from ``full_graph_path`` when given and
    from its own partition otherwise, and draws the updates from its edges.
    """
    if len(partition_paths) != 2:
        raise ValueError("exactly two partition files are required")
    partitions = [load_local_partition(path) for path in partition_paths]
    size = max(len(part.adj) for part in partitions)

    if full_graph_path is not None:
        edges, max_node = read_weighted_edge_list(full_graph_path)
        size = max(size, max_node + 1)
        initial_adj = build_adjacency(edges, size)
    else:
        initial_adj = partitions[0].adj

    start = time.perf_counter()
    initial = recompute_sssp(initial_adj, size, source)
    initial_ms = (time.perf_counter() - start) * 1000

    deletions, insertions = simulate_updates(
        partitions[0].edges, num_deletions, num_insertions, partitions[0].max_node
    )

    channels = PairChannel.create_pair()

    def task(rank: int) -> RankResult:
        own = ShortestPaths(list(initial.dist), list(initial.parent))
        try:
            return run_rank(
                rank, partitions[rank], own, deletions, insertions, async_depth, channels[rank]
            )
        except BaseException:
            channels[rank]._abort()
            raise

    with ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(task, rank) for rank in range(2)]
        results = [future.result() for future in futures]
    results[0].initial_ms = initial_ms
    return results