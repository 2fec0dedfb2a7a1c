import pytest

from dynsssp.graph import (
    Edge,
    Partition,
    build_adjacency,
    load_local_partition,
    parse_edges,
    read_weighted_edge_list,
    remove_edge,
)


def test_parse_edges_skips_malformed_lines():
    lines = ["0 1 5", "", "# comment", "1 2 3 extra", "x y z", "4 5"]
    assert parse_edges(lines) == [Edge(0, 1, 5), Edge(1, 2, 3)]


def test_parse_edges_rejects_negative_nodes():
    with pytest.raises(ValueError):
        parse_edges(["-1 2 3"])


def test_read_weighted_edge_list(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("0 1 5\n1 7 2\nbad line\n3 2 1\n")
    edges, max_node = read_weighted_edge_list(path)
    assert edges == [Edge(0, 1, 5), Edge(1, 7, 2), Edge(3, 2, 1)]
    assert max_node == max(max(e.u, e.v) for e in edges)


def test_read_weighted_edge_list_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_weighted_edge_list(tmp_path / "absent.txt")


def test_build_adjacency_keeps_order_and_size():
    edges = [Edge(0, 1, 5), Edge(0, 2, 3), Edge(2, 1, 1)]
    adj = build_adjacency(edges, 4)
    assert len(adj) == 4
    assert adj[0] == [(1, 5), (2, 3)]
    assert adj[2] == [(1, 1)]
    assert adj[1] == [] and adj[3] == []


def test_build_adjacency_default_size_covers_all_nodes():
    edges = [Edge(0, 5, 1)]
    adj = build_adjacency(edges)
    assert len(adj) == 6


def test_build_adjacency_rejects_small_size():
    with pytest.raises(ValueError):
        build_adjacency([Edge(0, 3, 1)], 2)


def test_remove_edge_removes_all_parallel_edges():
    adj = build_adjacency([Edge(0, 1, 5), Edge(0, 2, 3), Edge(0, 1, 9)], 3)
    remove_edge(adj, 0, 1)
    assert adj[0] == [(2, 3)]


def test_load_local_partition(tmp_path):
    path = tmp_path / "part0.txt"
    path.write_text("0 1 4\n1 2 2\n3 1 7\n")
    part = load_local_partition(path)
    assert isinstance(part, Partition)
    assert part.edges == [Edge(0, 1, 4), Edge(1, 2, 2), Edge(3, 1, 7)]
    assert part.local_nodes == {0, 1, 3}
    assert part.boundary_nodes == {1, 2}
    assert part.max_node == 3
    assert len(part.adj) == part.max_node + 1
    assert part.adj[3] == [(1, 7)]


def test_load_local_partition_stops_at_bad_token(tmp_path):
    path = tmp_path / "part1.txt"
    path.write_text("0 1 4 2 x 3 5 6 7")
    part = load_local_partition(path)
    assert part.edges == [Edge(0, 1, 4)]


def test_load_local_partition_empty_file(tmp_path):
    path = tmp_path / "part2.txt"
    path.write_text("")
    part = load_local_partition(path)
    assert part.adj == [] and part.edges == [] and part.max_node == 0