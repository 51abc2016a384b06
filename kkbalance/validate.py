import functools

from kkbalance.bucket import check_weight
from kkbalance.candidate import check_num_buckets
from kkbalance.errors import InvalidInput


def normalize_weights(weights) -> list:
    """
    Check that `weights` is a non-empty container of non-negative integers and
    return them as a list of plain ints.

    Args:
        weights (iterable): A list, tuple, NumPy array or Pandas Series of weights.

    Returns:
        list: The weights, in order, as Python ints.
    """
    try:
        num_items = len(weights)
    except TypeError:
        raise InvalidInput('weights must be a container')
    if num_items == 0:
        raise InvalidInput('Must have at least one weight to balance')
    return [check_weight(w) for w in weights]


def balancer(balancer_func):
    """
    Decorates balancer functions and ensures that parameters are valid.

    Args:
        balancer_func (function): function to decorate. It is called with a list
            of int weights, an int bucket count and the optional debug_info dict.

    Returns:
        A wrapped version of balancer_func that validates input.
    """
    @functools.wraps(balancer_func)
    def checked_balancer(weights, num_buckets, debug_info=None):
        num_buckets = check_num_buckets(num_buckets)
        weights = normalize_weights(weights)
        return balancer_func(weights, num_buckets, debug_info)

    return checked_balancer
