"""Recall measurement, memory budgets and random warm-up query sets."""

from __future__ import annotations

import logging
import re

import numpy as np
from numpy.typing import ArrayLike, DTypeLike

__all__ = [
    "TRAINING_SET_SIZE",
    "SPACE_FOR_CACHED_NODES_IN_GB",
    "THRESHOLD_FOR_CACHING_IN_GB",
    "NUM_NODES_TO_CACHE",
    "WARMUP_L",
    "get_memory_budget",
    "calculate_recall",
    "generate_random_warmup",
]

logger = logging.getLogger(__name__)

TRAINING_SET_SIZE = 1_500_000
SPACE_FOR_CACHED_NODES_IN_GB = 0.25
THRESHOLD_FOR_CACHING_IN_GB = 1.0
NUM_NODES_TO_CACHE = 250_000
WARMUP_L = 20

_GIB = 1024 * 1024 * 1024

_LEADING_NUMBER = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def _leading_float(text: str) -> float:
    """Parse the longest numeric prefix of text, or 0.0 if there is none."""
    match = _LEADING_NUMBER.match(text)
    return float(match.group(1)) if match else 0.0


def get_memory_budget(mem_budget_str: str) -> float:
    """Return the index RAM budget in bytes for a budget given in GiB.

    When the budget leaves enough room, space for cached nodes is set
    aside first.
    """
    budget = _leading_float(mem_budget_str)
    limit = budget
    if budget - SPACE_FOR_CACHED_NODES_IN_GB > THRESHOLD_FOR_CACHING_IN_GB:
        limit = budget - SPACE_FOR_CACHED_NODES_IN_GB
    return limit * _GIB


def calculate_recall(
    gold_std: ArrayLike,
    gs_dist: ArrayLike | None,
    our_results: ArrayLike,
    recall_at: int,
) -> float:
    """Return the mean recall@recall_at in percent.

    gold_std and our_results hold one row of ids per query. When gs_dist
    is given, ground-truth ids tied in distance with the recall_at-th one
    also count as correct answers.
    """
    gold = np.asarray(gold_std)
    ours = np.asarray(our_results)
    if gold.ndim != 2 or ours.ndim != 2:
        raise ValueError("ground truth and results must be two-dimensional")
    num_queries, dim_gs = gold.shape
    if ours.shape[0] != num_queries:
        raise ValueError(
            "Number of queries mismatch in ground truth and our results"
        )
    if num_queries == 0:
        raise ValueError("no queries to evaluate")
    dim_or = ours.shape[1]
    if recall_at <= 0 or dim_or < recall_at or recall_at > dim_gs:
        raise ValueError(
            f"ground truth has size {dim_gs}; our set has {dim_or} points. "
            f"Asking for recall {recall_at}"
        )

    dists = None
    if gs_dist is not None:
        dists = np.asarray(gs_dist)
        if dists.shape != gold.shape:
            raise ValueError("distance matrix shape differs from ground truth")

    total = 0
    for row, (gt_row, res_row) in enumerate(zip(gold, ours)):
        cutoff = recall_at
        if dists is not None:
            dist_row = dists[row]
            threshold = dist_row[recall_at - 1]
            cutoff = recall_at - 1
            while cutoff < dim_gs and dist_row[cutoff] == threshold:
                cutoff += 1
        gt = {int(v) for v in gt_row[:cutoff]}
        res = {int(v) for v in res_row[:recall_at]}
        total += len(gt & res)
    return total / num_queries * (100.0 / recall_at)


def generate_random_warmup(
    warmup_num: int,
    warmup_dim: int,
    warmup_aligned_dim: int,
    dtype: DTypeLike,
) -> np.ndarray:
    """Return warmup_num random vectors padded with zeros to the aligned size.

    Each of the first warmup_dim coordinates is a uniform integer in
    [-128, 127] converted to dtype; unsigned types wrap around.
    """
    if warmup_num < 0 or warmup_dim < 0:
        raise ValueError("warm-up count and dimension must not be negative")
    if warmup_aligned_dim < warmup_dim:
        raise ValueError("aligned dimension is smaller than the dimension")
    target = np.dtype(dtype)
    logger.info(
        "Generating random warmup file with dim %d and aligned dim %d",
        warmup_dim, warmup_aligned_dim,
    )
    rng = np.random.default_rng()
    values = rng.integers(-128, 128, size=(warmup_num, warmup_dim), dtype=np.int64)
    if np.issubdtype(target, np.unsignedinteger):
        values = values % (int(np.iinfo(target).max) + 1)
    warmup = np.zeros((warmup_num, warmup_aligned_dim), dtype=target)
    warmup[:, :warmup_dim] = values.astype(target)
    return warmup