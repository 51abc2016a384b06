import numpy as np
import pandas as pd
import pytest

import kkbalance
from kkbalance import InvalidInput


@pytest.fixture
def jobs_df():
    return pd.DataFrame({'job': ['a', 'b', 'c', 'd', 'e'], 'cost': [4, 4, 4, 1, 2]})


def test_get_bucket_sums():
    candidate = kkbalance.balance([1, 2, 4, 8], 3)
    sums = kkbalance.get_bucket_sums(candidate)
    assert sums.dtype == np.int64
    assert list(sums) == [8, 4, 3]


def test_get_bucket_sums_beyond_int64():
    big = 2 ** 64 - 1
    candidate = kkbalance.balance([big, big, 1], 2)
    sums = kkbalance.get_bucket_sums(candidate)
    assert sums.dtype == object
    assert list(sums) == [big + 1, big]


def test_bucket_assignments():
    weights = [4, 4, 4, 1, 2]
    candidate = kkbalance.balance(weights, 2)
    assignments = kkbalance.bucket_assignments(weights, candidate)
    assert list(assignments) == [1, 1, 2, 2, 2]


def test_bucket_assignments_match_bucket_sums():
    weights = [7, 3, 3, 9, 1, 1, 12, 5, 5, 5, 0]
    candidate = kkbalance.balance(weights, 4)
    assignments = kkbalance.bucket_assignments(weights, candidate)
    sums = [0] * 4
    for weight, bucket in zip(weights, assignments):
        sums[bucket - 1] += weight
    assert sums == candidate.sums


def test_bucket_assignments_rejects_foreign_candidate():
    candidate = kkbalance.balance([4, 4, 1], 2)
    with pytest.raises(InvalidInput):
        kkbalance.bucket_assignments([4, 1, 1], candidate)
    candidate = kkbalance.balance([4, 1], 2)
    with pytest.raises(InvalidInput):
        kkbalance.bucket_assignments([4, 1, 3], candidate)


def test_get_balance_series_keeps_index():
    sizes = pd.Series([4, 4, 4, 1, 2], index=[10, 20, 30, 40, 50])
    series, candidate = kkbalance.get_balance_series(sizes, 2)
    assert series.equals(pd.Series([1, 1, 2, 2, 2], index=[10, 20, 30, 40, 50], dtype=np.int64))
    assert candidate.spread == 1


def test_get_balance_series_whole_floats():
    series, candidate = kkbalance.get_balance_series(pd.Series([4.0, 4.0, 4.0, 1.0, 2.0]), 2)
    assert list(series) == [1, 1, 2, 2, 2]
    assert candidate.sums == [8, 7]


@pytest.mark.parametrize("sizes", [[1.5, 2.0], [1.0, np.nan], [1.0, np.inf], [-np.inf], [2.0 ** 63, -1.0], []])
def test_get_balance_series_rejects_bad_sizes(sizes):
    with pytest.raises(InvalidInput):
        kkbalance.get_balance_series(pd.Series(sizes, dtype=np.float64), 2)


def test_get_balance_series_debug_info():
    debug_info = {}
    kkbalance.get_balance_series(pd.Series([3, 3, 2, 2, 2]), 2, debug_info=debug_info)
    assert debug_info['steps'] == 4


def test_assign_buckets(jobs_df):
    result, candidate = kkbalance.assign_buckets(jobs_df, 'cost', 2, 'worker')

    assert list(result.columns) == ['job', 'cost', 'worker']
    assert list(result['worker']) == [1, 1, 2, 2, 2]
    assert 'worker' not in jobs_df.columns
    assert str(candidate) == '2 buckets: [8],[7]'


def test_assign_buckets_default_column(jobs_df):
    result, candidate = kkbalance.assign_buckets(jobs_df, 'cost', 1)
    assert list(result['bucket']) == [1] * 5
    assert candidate.spread == 0


def test_assign_buckets_invalid(jobs_df):
    with pytest.raises(InvalidInput):
        kkbalance.assign_buckets(jobs_df, 'cost', 0)


def test_get_balance_series_rejects_infinite_sizes():
    with pytest.raises(InvalidInput, match='finite'):
        kkbalance.get_balance_series(pd.Series([4.0, np.inf]), 2)


def test_get_balance_series_large_whole_floats():
    sizes = pd.Series([2.0 ** 64, 2.0 ** 63, 2.0 ** 63])
    series, candidate = kkbalance.get_balance_series(sizes, 2)
    assert list(series) == [1, 2, 2]
    assert candidate.sums == [2 ** 64, 2 ** 64]


def test_get_balance_series_negative_float():
    with pytest.raises(InvalidInput, match='non-negative, got -1$'):
        kkbalance.get_balance_series(pd.Series([4.0, -1.0]), 2)
