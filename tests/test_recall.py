import numpy as np
import pytest

from vamanatools.recall import (
    calculate_recall,
    generate_random_warmup,
    get_memory_budget,
)

GIB = 1024 * 1024 * 1024


def test_memory_budget_reserves_cache_space():
    assert get_memory_budget("2") == pytest.approx(1.75 * GIB)


def test_memory_budget_small_keeps_everything():
    assert get_memory_budget("1") == pytest.approx(1.0 * GIB)


def test_memory_budget_at_threshold_not_reduced():
    assert get_memory_budget("1.25") == pytest.approx(1.25 * GIB)


def test_memory_budget_parses_numeric_prefix():
    assert get_memory_budget("3.5GB") == pytest.approx(3.25 * GIB)


def test_memory_budget_garbage_is_zero():
    assert get_memory_budget("abc") == 0.0


def test_perfect_recall():
    gold = np.array([[0, 1, 2], [3, 4, 5]], dtype=np.uint32)
    assert calculate_recall(gold, None, gold.copy(), 3) == pytest.approx(100.0)


def test_partial_recall_without_distances():
    gold = np.array([[0, 1, 2]], dtype=np.uint32)
    ours = np.array([[0, 2, 5]], dtype=np.uint32)
    assert calculate_recall(gold, None, ours, 2) == pytest.approx(50.0)


def test_ties_count_as_hits():
    gold = np.array([[0, 1, 2]], dtype=np.uint32)
    dist = np.array([[1.0, 2.0, 2.0]], dtype=np.float32)
    ours = np.array([[0, 2, 5]], dtype=np.uint32)
    assert calculate_recall(gold, dist, ours, 2) == pytest.approx(100.0)


def test_recall_averaged_over_queries():
    gold = np.array([[0, 1], [2, 3]], dtype=np.uint32)
    ours = np.array([[0, 1], [9, 8]], dtype=np.uint32)
    assert calculate_recall(gold, None, ours, 2) == pytest.approx(50.0)


def test_recall_uses_only_first_results():
    gold = np.array([[0, 1, 2, 3]], dtype=np.uint32)
    ours = np.array([[7, 0, 1, 2]], dtype=np.uint32)
    assert calculate_recall(gold, None, ours, 1) == pytest.approx(0.0)


def test_query_count_mismatch_raises():
    gold = np.zeros((2, 3), dtype=np.uint32)
    ours = np.zeros((1, 3), dtype=np.uint32)
    with pytest.raises(ValueError):
        calculate_recall(gold, None, ours, 1)


def test_recall_at_beyond_results_raises():
    gold = np.zeros((1, 5), dtype=np.uint32)
    ours = np.zeros((1, 2), dtype=np.uint32)
    with pytest.raises(ValueError):
        calculate_recall(gold, None, ours, 3)


def test_recall_at_beyond_ground_truth_raises():
    gold = np.zeros((1, 2), dtype=np.uint32)
    ours = np.zeros((1, 5), dtype=np.uint32)
    with pytest.raises(ValueError):
        calculate_recall(gold, None, ours, 3)


def test_warmup_int8_shape_and_padding():
    warmup = generate_random_warmup(50, 5, 8, np.int8)
    assert warmup.shape == (50, 8)
    assert warmup.dtype == np.int8
    assert np.all(warmup[:, 5:] == 0)


def test_warmup_float_values_in_range_and_integral():
    warmup = generate_random_warmup(200, 4, 4, np.float32)
    assert warmup.dtype == np.float32
    assert warmup.min() >= -128 and warmup.max() <= 127
    assert np.all(warmup == np.round(warmup))


def test_warmup_uint8_wraps():
    warmup = generate_random_warmup(100, 3, 4, np.uint8)
    assert warmup.dtype == np.uint8
    assert np.all(warmup[:, 3] == 0)


def test_warmup_bad_alignment_raises():
    with pytest.raises(ValueError):
        generate_random_warmup(10, 8, 4, np.float32)