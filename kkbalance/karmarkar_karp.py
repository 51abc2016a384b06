import heapq
import itertools
import logging

from kkbalance.candidate import PartitionCandidate
from kkbalance.validate import balancer

name = 'karmarkar_karp'

logger = logging.getLogger(__name__)


@balancer
def balance(weights, num_buckets, debug_info=None) -> PartitionCandidate:
    """
    Split `weights` into `num_buckets` groups with the Karmarkar-Karp
    differencing heuristic.

    Every weight starts out as its own candidate. The two candidates with the
    largest spread are repeatedly taken off the heap and merged, heaviest
    bucket against lightest, until only one candidate is left.

    Candidates with equal spread come off the heap in the order they were
    pushed. A merged candidate is pushed with a new sequence number.

    Args:
        weights (iterable): Non-negative integer weights.
        num_buckets (int): Number of buckets to split the weights into.
        debug_info: A dictionary to be populated with debugging information.

    Returns:
        PartitionCandidate: `num_buckets` buckets holding every weight exactly
            once, sorted by descending sum.
    """
    sequence = itertools.count()
    heap = [(-c.spread, next(sequence), c)
            for c in (PartitionCandidate.singleton(w, num_buckets) for w in weights)]
    heapq.heapify(heap)
    logger.debug(f'Balancing {len(weights)} weights into {num_buckets} buckets')

    trace = []
    while len(heap) > 1:
        first = heapq.heappop(heap)[2]
        second = heapq.heappop(heap)[2]
        step = {'first': first.spread, 'second': second.spread}
        second.merge(first)
        step['merged'] = second.spread
        trace.append(step)
        logger.debug(f"Merge {len(trace)}: spreads {step['first']} and {step['second']} -> {step['merged']}")
        heapq.heappush(heap, (-second.spread, next(sequence), second))

    result = heap[0][2]
    logger.debug(f'Finished after {len(trace)} merges with spread {result.spread}')

    if debug_info is not None:
        debug_info['items'] = weights
        debug_info['steps'] = len(trace)
        debug_info['trace'] = trace

    return result
