import io

import pytest

from dynsssp.cli import main, run_parallel, run_serial

EDGES = [
    (0, 1, 4), (0, 2, 1), (2, 1, 2), (1, 3, 1), (2, 3, 5),
    (3, 4, 3), (4, 5, 1), (3, 5, 7), (5, 0, 2), (1, 4, 6),
]


@pytest.fixture
def graph_file(tmp_path):
    path = tmp_path / "graph.txt"
    path.write_text("".join(f"{u} {v} {w}\n" for u, v, w in EDGES), encoding="utf-8")
    return path


def test_run_serial_without_updates_agrees(graph_file):
    out = io.StringIO()
    recomputed, dynamic = run_serial(graph_file, 0, 0, out)
    assert dynamic.dist == recomputed.dist
    assert recomputed.dist[0] == 0
    text = out.getvalue()
    assert "Initial SSSP completed in" in text
    assert "Simulated 0 deletions and 0 insertions." in text
    assert "Asynchronous update converged in 1 iterations." in text


def test_run_serial_dynamic_never_beats_recompute(graph_file):
    recomputed, dynamic = run_serial(graph_file, 3, 3, io.StringIO())
    assert len(recomputed) == len(dynamic) == 6
    assert all(d >= r for d, r in zip(dynamic.dist, recomputed.dist))


def test_run_parallel_without_updates_agrees(graph_file):
    out = io.StringIO()
    recomputed, dynamic = run_parallel(graph_file, 0, 0, 2, 2, out)
    assert dynamic.dist == recomputed.dist
    assert dynamic.parent == recomputed.parent
    assert "Recomputed SSSP after updates in" in out.getvalue()


def test_run_parallel_dynamic_never_beats_recompute(graph_file):
    recomputed, dynamic = run_parallel(graph_file, 3, 3, 1, 2, io.StringIO())
    assert dynamic.dist[0] == 0
    assert all(d >= r for d, r in zip(dynamic.dist, recomputed.dist))


def test_run_serial_rejects_too_many_deletions(graph_file):
    with pytest.raises(ValueError):
        run_serial(graph_file, 0, len(EDGES) + 1, io.StringIO())


def test_main_serial_with_options(graph_file, capsys):
    assert main(["serial", str(graph_file), "--insertions", "1", "--deletions", "1"]) == 0
    assert "Dynamic update (with flags + async) completed in" in capsys.readouterr().out


def test_main_parallel_prompts(graph_file, capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("1\n1\n2\n"))
    assert main(["parallel", str(graph_file), "--workers", "2"]) == 0
    text = capsys.readouterr().out
    assert "Enter number of edge insertions: " in text
    assert "Enter asynchrony depth: " in text


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent.txt"
    assert main(["serial", str(missing), "--insertions", "0", "--deletions", "0"]) == 1
    assert "Failed to open file" in capsys.readouterr().err


def test_main_bad_prompt_answer(graph_file, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("many\n"))
    assert main(["serial", str(graph_file)]) == 1


def test_main_distributed(tmp_path, capsys):
    part0 = tmp_path / "p0.txt"
    part1 = tmp_path / "p1.txt"
    part0.write_text("".join(f"{u} {v} {w}\n" for u, v, w in EDGES[:5]), encoding="utf-8")
    part1.write_text("".join(f"{u} {v} {w}\n" for u, v, w in EDGES[5:]), encoding="utf-8")
    code = main([
        "distributed", "0", "3",
        "--partitions", str(part0), str(part1),
        "--deletions", "1", "--insertions", "1",
    ])
    assert code == 0
    text = capsys.readouterr().out
    assert "Rank 0: dynamic update finished in" in text
    assert "Rank 1: dynamic update finished in" in text