"""Distances, recall scoring, cached binary I/O and shard-graph merging for ANN indices."""

__version__ = "0.1.0"

__all__ = [
    "errors",
    "timer",
    "concurrent_queue",
    "cached_io",
    "distance",
    "recall",
    "merge",
]