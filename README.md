# dynsssp

Single-source shortest paths (SSSP) on weighted directed graphs, kept up to
date after edge deletions and insertions without recomputing from scratch.

The package computes a shortest-path tree with Dijkstra's algorithm, draws a
reproducible set of random edge updates (seed 42 by default), and repairs the
tree:

- a deleted tree edge cuts off the whole subtree below it (distances become
  infinite, parents `-1`);
- inserted edges are added and their targets marked for relaxation;
- relaxation passes over the marked nodes then run until no distance changes.

Serial, thread-pool and two-partition variants of the repair are provided, and
the command line times each against a full recomputation.

## Installation

```
pip install .
```

Python 3.10 or later; no third-party dependencies. Tests use pytest
(`pip install .[test]`).

## Input format

A plain-text weighted edge list, one directed edge per line:

```
0 1 4
0 2 1
2 1 2
1 3 5
```

Each line is `source target weight`. Lines whose first three fields are not
integers are skipped; negative node ids raise `ValueError`. Nodes are numbered
from 0.

Partition files (for the `distributed` command) hold whitespace-separated
`u v w` triples; reading stops at the first triple that is not three integers.

## Command line

```
dynsssp --help
```

Three subcommands:

```
dynsssp serial GRAPH [--insertions N] [--deletions N]
dynsssp parallel GRAPH [--insertions N] [--deletions N] [--depth D] [--workers W]
dynsssp distributed SOURCE ASYNC_DEPTH [--partitions P0 P1] [--full-graph GRAPH]
                                       [--deletions N] [--insertions N]
```

Any count left out on the command line is asked for on standard input.

- `serial` computes the tree from node 0, simulates the updates, times a full
  recomputation on the updated graph, then times the serial repair of the
  original tree: all deletions cut at once, all insertions added, relaxation
  passes until convergence.
- `parallel` does the same recomputation, then repairs starting from the
  recomputed tree, applying the updates in batches of 100 and relaxing with a
  thread pool of `--workers` threads, following improvements up to `--depth`
  hops per pass.
- `distributed` loads two partition files (default `part0.txt` and
  `part1.txt`), computes the initial tree from `SOURCE` over the `--full-graph`
  file if given, otherwise over the first partition, draws the updates from
  the first partition's edges, and runs two ranks that relax their own nodes
  and swap distances after every pass until neither changes.

Each command prints timings in milliseconds and the number of relaxation
passes. A file that cannot be opened prints `Failed to open file: ...`, and an
invalid request (for example more deletions than edges) prints `error: ...`;
both exit with status 1.

## Library use

```python
from dynsssp.graph import read_weighted_edge_list, build_adjacency
from dynsssp.sssp import recompute_sssp, simulate_updates
from dynsssp.dynamic import (
    UpdateFlags,
    process_deletions,
    process_insertions,
    asynchronous_parallel_update,
)

edges, max_node = read_weighted_edge_list("graph.txt")
size = max_node + 1
adj = build_adjacency(edges, size)

paths = recompute_sssp(adj, size, 0)
deletions, insertions = simulate_updates(edges, 10, 10, size, 42)

flags = UpdateFlags.for_size(size)
process_deletions(adj, paths, deletions, flags)
process_insertions(adj, insertions, paths, flags)
passes = asynchronous_parallel_update(adj, paths, flags, 5, 4)

print(paths.dist[3], paths.parent[3], paths.reachable(3))
```

Modules:

- `dynsssp.graph` — `Edge`, `Partition`, `parse_edges`,
  `read_weighted_edge_list`, `build_adjacency`, `remove_edge`,
  `load_local_partition`.
- `dynsssp.sssp` — `ShortestPaths` (`dist`, `parent`, `empty`, `reachable`),
  `recompute_sssp`, `simulate_updates`.
- `dynsssp.dynamic` — `UpdateFlags`, `mark_subtree`, `process_deletions`,
  `process_deletions_batch`, `process_insertions`, `mark_insertions`,
  `asynchronous_serial_update`, `asynchronous_parallel_update`, `batched`.
- `dynsssp.distributed` — `PairChannel`, `RankResult`,
  `exchange_ghost_distances`, `async_update`, `run_rank`, `run_distributed`.
- `dynsssp.cli` — `run_serial`, `run_parallel`, `main`.

## What it does not do

- The two ranks of `distributed` are threads in one process joined by a
  `PairChannel`; there is no transport across processes or machines, and
  exactly two partitions are supported.
- The command line reports timings and pass counts only; it does not write the
  resulting distances or tree anywhere. Use the library functions, which return
  `ShortestPaths`, for that.
- Partitioning a graph into partition files is not provided.