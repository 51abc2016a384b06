from collections import defaultdict, deque

import numpy as np
import pandas as pd

from kkbalance.errors import KKBalanceError, InvalidInput, InternalInvariantViolation, ShapeMismatch
from kkbalance.bucket import Bucket
from kkbalance.candidate import PartitionCandidate
from kkbalance.karmarkar_karp import balance
from kkbalance.validate import balancer, normalize_weights


def get_bucket_sums(candidate: PartitionCandidate) -> np.ndarray:
    """
    Return a NumPy array with the sum of each bucket in `candidate`, heaviest first.

    The array is int64 unless a sum does not fit in 64 bits, in which case it is an
    object array of Python ints.
    """
    sums = candidate.sums
    if sums[0] > int(np.iinfo(np.int64).max):
        return np.array(sums, dtype=object)
    return np.array(sums, dtype=np.int64)


def bucket_assignments(weights, candidate: PartitionCandidate) -> np.ndarray:
    """
    Given the weights that were balanced and the resulting candidate, work out which
    bucket each weight went to.

    Buckets hold weights rather than item positions, so items with equal weights are
    interchangeable. They are handed out in input order: the first item of a given
    weight goes to the first bucket (by bucket number) that holds that weight.

    Args:
        weights (iterable): The weights passed to `balance`, in their original order.
        candidate (PartitionCandidate): The result of balancing `weights`.

    Returns:
        NumPy array with one entry per weight: the 1-based number of the bucket it
        was assigned to.

    Example:
        weights = [4, 4, 4, 1, 2]
        candidate = balance(weights, 2)   # buckets [4,4] and [4,1,2]

        Returns [1, 1, 2, 2, 2]
    """
    weights = normalize_weights(weights)
    positions = defaultdict(deque)
    for position, weight in enumerate(weights):
        positions[weight].append(position)

    assignments = np.zeros(len(weights), dtype=np.int64)
    for bucket_number, bucket in enumerate(candidate, start=1):
        for weight in bucket:
            if not positions[weight]:
                raise InvalidInput(f'Candidate holds more {weight}s than the weights provided')
            assignments[positions[weight].popleft()] = bucket_number
    if any(positions.values()):
        raise InvalidInput('Candidate does not hold every weight provided')
    return assignments


def get_balance_series(sizes: pd.Series, num_buckets: int, debug_info=None):
    """
    Takes a Pandas Series of item sizes and returns a Series that assigns each item to
    one of `num_buckets` buckets so that the bucket sums are as even as Karmarkar-Karp
    can make them.

    Args:
        sizes (Series): Non-negative integer item sizes. A float Series is accepted if
            every value is a whole number.
        num_buckets (int): Number of buckets to distribute items into.
        debug_info: A dictionary to be populated with debugging information.

    Returns:
        pandas.Series: Bucket numbers (starting with 1), indexed like `sizes`.
        PartitionCandidate: The balanced result.
    """
    values = sizes.to_numpy()
    if values.dtype.kind == 'f':
        if not np.isfinite(values).all() or not np.array_equal(values, np.floor(values)):
            raise InvalidInput('Sizes must all be finite whole numbers')
        values = [int(v) for v in values]
    candidate = balance(values, num_buckets, debug_info=debug_info)
    return pd.Series(bucket_assignments(values, candidate), index=sizes.index), candidate


def assign_buckets(data: pd.DataFrame, sizes: str, num_buckets: int, column_name: str = 'bucket',
                   debug_info=None):
    """
    Return a copy of `data` with a column named `column_name` that holds, for each row,
    the number of the bucket that row is assigned to.

    Args:
        data (DataFrame): The DataFrame to add a column to.
        sizes (str): Column to get size values from.
        num_buckets (int): Number of buckets to distribute rows into.
        column_name (str): Name of the column to add.
        debug_info: A dictionary to be populated with debugging information.

    Returns:
        DataFrame: Copy of the original DataFrame with the bucket column added.
        PartitionCandidate: The balanced result.
    """
    series, candidate = get_balance_series(data[sizes], num_buckets, debug_info=debug_info)
    data = data.copy()
    data[column_name] = series
    return data, candidate
