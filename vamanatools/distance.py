"""Vector norms, cosine similarity and L2 distance functions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np
from numpy.typing import ArrayLike

__all__ = [
    "compute_l2_norm",
    "compute_cosine_similarity",
    "compute_cosine_similarity_batch",
    "Distance",
    "DistanceCosine",
    "DistanceL2Int8",
    "DistanceL2UInt8",
    "DistanceL2",
    "SlowDistanceL2Int",
    "SlowDistanceL2Float",
]


def _prefix(values: ArrayLike, length: int | None, dtype) -> np.ndarray:
    """Return the first `length` entries of values as a 1-D array of dtype."""
    array = np.asarray(values).ravel()
    if length is None:
        length = array.shape[0]
    if length < 0:
        raise ValueError("length must not be negative")
    if length > array.shape[0]:
        raise ValueError(
            f"length {length} exceeds vector size {array.shape[0]}"
        )
    return array[:length].astype(dtype, copy=False)


def compute_l2_norm(vector: ArrayLike) -> float:
    """Return the Euclidean norm of a vector, computed in single precision."""
    values = _prefix(vector, None, np.float32)
    return float(np.sqrt(np.dot(values, values), dtype=np.float32))


def compute_cosine_similarity(left: ArrayLike, right: ArrayLike) -> float:
    """Return the cosine of the angle between two equally long vectors.

    Zero vectors give NaN, as the division is left unguarded.
    """
    a = _prefix(left, None, np.float32)
    b = _prefix(right, None, np.float32)
    if a.shape != b.shape:
        raise ValueError(
            f"vectors differ in length: {a.shape[0]} and {b.shape[0]}"
        )
    left_norm = np.float32(compute_l2_norm(a))
    right_norm = np.float32(compute_l2_norm(b))
    dot = np.dot(a, b)
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float32(dot) / (left_norm * right_norm))


def compute_cosine_similarity_batch(
    query: ArrayLike, indices: Sequence[int], all_data: ArrayLike
) -> np.ndarray:
    """Return the cosine similarity of the query to each indexed row of data.

    all_data holds one point per row; indices select the rows to compare.
    """
    data = np.asarray(all_data, dtype=np.float32)
    q = np.asarray(query, dtype=np.float32).ravel()
    if data.ndim == 1:
        if q.shape[0] == 0 or data.shape[0] % q.shape[0]:
            raise ValueError("flat data size is not a multiple of the query size")
        data = data.reshape(-1, q.shape[0])
    if data.shape[1] != q.shape[0]:
        raise ValueError(
            f"data dimension {data.shape[1]} differs from query dimension {q.shape[0]}"
        )
    return np.array(
        [compute_cosine_similarity(data[int(i)], q) for i in indices],
        dtype=np.float32,
    )


class Distance(ABC):
    """Compares two vectors over their first `length` entries."""

    @abstractmethod
    def compare(self, a: ArrayLike, b: ArrayLike, length: int | None = None) -> float:
        """Return the comparison value of a and b."""


class DistanceCosine(Distance):
    """Cosine similarity (larger means closer)."""

    def compare(self, a: ArrayLike, b: ArrayLike, length: int | None = None) -> float:
        return compute_cosine_similarity(
            _prefix(a, length, np.float32), _prefix(b, length, np.float32)
        )


def _squared_l2_int(a: ArrayLike, b: ArrayLike, length: int | None) -> float:
    x = _prefix(a, length, np.int64)
    y = _prefix(b, length, np.int64)
    diff = x - y
    return float(np.dot(diff, diff))


def _squared_l2_float(a: ArrayLike, b: ArrayLike, length: int | None) -> float:
    x = _prefix(a, length, np.float32)
    y = _prefix(b, length, np.float32)
    diff = x - y
    return float(np.dot(diff, diff))


class DistanceL2Int8(Distance):
    """Squared Euclidean distance between signed 8-bit vectors."""

    def compare(self, a: ArrayLike, b: ArrayLike, length: int | None = None) -> float:
        return _squared_l2_int(
            _prefix(a, length, np.int8), _prefix(b, length, np.int8), None
        )


class DistanceL2UInt8(Distance):
    """Squared Euclidean distance between unsigned 8-bit vectors."""

    def compare(self, a: ArrayLike, b: ArrayLike, length: int | None = None) -> float:
        return _squared_l2_int(
            _prefix(a, length, np.uint8), _prefix(b, length, np.uint8), None
        )


class DistanceL2(Distance):
    """Squared Euclidean distance between single-precision vectors."""

    def compare(self, a: ArrayLike, b: ArrayLike, length: int | None = None) -> float:
        return _squared_l2_float(a, b, length)


class SlowDistanceL2Int(Distance):
    """Plain squared Euclidean distance for integer vectors."""

    def compare(self, a: ArrayLike, b: ArrayLike, length: int | None = None) -> float:
        return _squared_l2_int(a, b, length)


class SlowDistanceL2Float(Distance):
    """Plain squared Euclidean distance for floating-point vectors."""

    def compare(self, a: ArrayLike, b: ArrayLike, length: int | None = None) -> float:
        return _squared_l2_float(a, b, length)