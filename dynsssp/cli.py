"""Command line: full recomputation against incremental repair of shortest paths."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from typing import TextIO

from dynsssp.distributed import run_distributed
from dynsssp.dynamic import (
    UpdateFlags,
    asynchronous_parallel_update,
    asynchronous_serial_update,
    batched,
    mark_insertions,
    process_deletions,
    process_deletions_batch,
    process_insertions,
)
from dynsssp.graph import Adjacency, Edge, PathArg, build_adjacency, read_weighted_edge_list, remove_edge
from dynsssp.sssp import ShortestPaths, recompute_sssp, simulate_updates

BATCH_SIZE = 100


def _ms(seconds: float) -> int:
    return int(seconds * 1000)


def _updated_adjacency(adj: Adjacency, deletions: Sequence[Edge], insertions: Sequence[Edge]) -> Adjacency:
    updated = [list(neighbours) for neighbours in adj]
    for u, v, _ in deletions:
        remove_edge(updated, u, v)
    for u, v, w in insertions:
        updated[u].append((v, w))
    return updated


def _prepare(path: PathArg, num_insertions: int, num_deletions: int, out: TextIO):
    edges, max_node = read_weighted_edge_list(path)
    n = max_node + 1
    adj = build_adjacency(edges, n)

    start = time.perf_counter()
    recompute_sssp(adj, n)
    print(f"Initial SSSP completed in {_ms(time.perf_counter() - start)} ms", file=out)

    deletions, insertions = simulate_updates(edges, num_deletions, num_insertions, n)
    print(f"Simulated {num_deletions} deletions and {num_insertions} insertions.", file=out)

    updated = _updated_adjacency(adj, deletions, insertions)
    start = time.perf_counter()
    recomputed = recompute_sssp(updated, n)
    print(f"Recomputed SSSP after updates in {_ms(time.perf_counter() - start)} ms", file=out)
    return edges, n, deletions, insertions, recomputed


def run_serial(
    path: PathArg, num_insertions: int, num_deletions: int, out: TextIO | None = None
) -> tuple[ShortestPaths, ShortestPaths]:
    """Compare full recomputation with the serial dynamic update.

    Returns the recomputed paths and the dynamically updated ones.
    """
    out = out or sys.stdout
    edges, n, deletions, insertions, recomputed = _prepare(path, num_insertions, num_deletions, out)

    adj_dynamic = build_adjacency(edges, n)
    paths = recompute_sssp(adj_dynamic, n)
    flags = UpdateFlags.for_size(n)

    start = time.perf_counter()
    process_deletions_batch(adj_dynamic, paths, deletions, flags)
    mark_insertions(adj_dynamic, insertions, flags)
    iterations = asynchronous_serial_update(adj_dynamic, paths, flags)
    elapsed = time.perf_counter() - start
    print(f"Asynchronous update converged in {iterations} iterations.", file=out)
    print(f"Dynamic update (with flags + async) completed in {_ms(elapsed)} ms", file=out)
    return recomputed, paths


def run_parallel(
    path: PathArg,
    num_insertions: int,
    num_deletions: int,
    async_depth: int,
    workers: int | None = None,
    out: TextIO | None = None,
) -> tuple[ShortestPaths, ShortestPaths]:
    """Compare full recomputation with the threaded dynamic update.

    The dynamic phase starts from the recomputed tree, applies the updates in
    batches and propagates up to ``async_depth`` hops per pass.
    """
    out = out or sys.stdout
    edges, n, deletions, insertions, recomputed = _prepare(path, num_insertions, num_deletions, out)

    adj_dynamic = build_adjacency(edges, n)
    paths = ShortestPaths(list(recomputed.dist), list(recomputed.parent))
    flags = UpdateFlags.for_size(n)

    start = time.perf_counter()
    for batch in batched(deletions, BATCH_SIZE):
        process_deletions(adj_dynamic, paths, batch, flags)
    for batch in batched(insertions, BATCH_SIZE):
        process_insertions(adj_dynamic, batch, paths, flags)
    iterations = asynchronous_parallel_update(adj_dynamic, paths, flags, async_depth, workers)
    elapsed = time.perf_counter() - start
    print(f"Asynchronous update converged in {iterations} iterations.", file=out)
    print(f"Dynamic update (with flags + async + threads) completed in {_ms(elapsed)} ms", file=out)
    return recomputed, paths


def _ask(value: int | None, prompt: str, out: TextIO) -> int:
    if value is not None:
        return value
    out.write(prompt)
    out.flush()
    line = sys.stdin.readline()
    return int(line)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dynsssp", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    serial = commands.add_parser("serial", help="serial dynamic update")
    serial.add_argument("path", help="weighted edge list file")
    serial.add_argument("--insertions", type=int)
    serial.add_argument("--deletions", type=int)

    parallel = commands.add_parser("parallel", help="threaded dynamic update")
    parallel.add_argument("path", help="weighted edge list file")
    parallel.add_argument("--insertions", type=int)
    parallel.add_argument("--deletions", type=int)
    parallel.add_argument("--depth", type=int)
    parallel.add_argument("--workers", type=int)

    distributed = commands.add_parser("distributed", help="two-rank partitioned update")
    distributed.add_argument("source", type=int, help="source node")
    distributed.add_argument("async_depth", type=int, help="asynchrony depth")
    distributed.add_argument("--partitions", nargs=2, default=["part0.txt", "part1.txt"])
    distributed.add_argument("--full-graph", dest="full_graph")
    distributed.add_argument("--deletions", type=int)
    distributed.add_argument("--insertions", type=int)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line and return its exit status."""
    args = _parser().parse_args(argv)
    out = sys.stdout
    try:
        if args.command == "serial":
            insertions = _ask(args.insertions, "Enter number of edge insertions: ", out)
            deletions = _ask(args.deletions, "Enter number of edge deletions: ", out)
            run_serial(args.path, insertions, deletions, out)
        elif args.command == "parallel":
            insertions = _ask(args.insertions, "Enter number of edge insertions: ", out)
            deletions = _ask(args.deletions, "Enter number of edge deletions: ", out)
            depth = _ask(args.depth, "Enter asynchrony depth: ", out)
            run_parallel(args.path, insertions, deletions, depth, args.workers, out)
        else:
            deletions = _ask(args.deletions, "Enter number of deletions: ", out)
            insertions = _ask(args.insertions, "Enter number of insertions: ", out)
            results = run_distributed(
                args.partitions, args.source, args.async_depth, deletions, insertions, args.full_graph
            )
            print(f"Initial SSSP completed in {int(results[0].initial_ms or 0)} ms", file=out)
            for result in results:
                print(
                    f"Rank {result.rank}: dynamic update finished in {int(result.elapsed_ms)} ms",
                    file=out,
                )
    except OSError as error:
        print(f"Failed to open file: {error.filename}", file=sys.stderr)
        return 1
    except ValueError as error:
        print(f"error: {error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())