"""Single-source shortest paths with incremental repair after edge deletions and insertions."""

__version__ = "0.1.0"
__all__ = ["graph", "sssp", "dynamic", "distributed", "cli"]