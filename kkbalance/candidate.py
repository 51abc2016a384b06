import numbers

from kkbalance.bucket import Bucket
from kkbalance.errors import InvalidInput, InternalInvariantViolation, ShapeMismatch


def check_num_buckets(num_buckets) -> int:
    if isinstance(num_buckets, bool) or not isinstance(num_buckets, numbers.Integral):
        raise InvalidInput(f'Number of buckets must be an integer, got {num_buckets!r}')
    if num_buckets < 1:
        raise InvalidInput('Must request at least one bucket')
    return int(num_buckets)


class PartitionCandidate(object):
    """
    One way of splitting some of the input weights into `k` buckets.

    The buckets are always sorted by descending sum, so the first bucket is
    the heaviest and the last is the lightest. `spread` is the difference
    between the two.
    """

    __slots__ = ('_buckets', '_consumed')

    def __init__(self, buckets):
        self._buckets = sorted(buckets, key=lambda b: b.sum, reverse=True)
        if not self._buckets:
            raise InvalidInput('Must request at least one bucket')
        self._consumed = False

    @classmethod
    def singleton(cls, weight, num_buckets):
        """
        Build a candidate holding one weight in its first bucket and leaving
        the other `num_buckets` - 1 buckets empty.
        """
        num_buckets = check_num_buckets(num_buckets)
        buckets = [Bucket.singleton(weight)]
        buckets.extend(Bucket.empty() for _ in range(num_buckets - 1))
        return cls(buckets)

    def _check_live(self):
        if self._consumed:
            raise InternalInvariantViolation('Candidate was merged into another candidate and can no longer be used')

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def k(self) -> int:
        self._check_live()
        return len(self._buckets)

    num_buckets = k

    @property
    def buckets(self) -> tuple:
        self._check_live()
        return tuple(self._buckets)

    @property
    def sums(self) -> list:
        self._check_live()
        return [b.sum for b in self._buckets]

    @property
    def spread(self) -> int:
        self._check_live()
        return self._buckets[0].sum - self._buckets[-1].sum

    def merge(self, other: 'PartitionCandidate'):
        """
        Fold `other` into this candidate, consuming it.

        Our heaviest bucket absorbs other's lightest, our second heaviest
        absorbs other's second lightest, and so on. The buckets are then
        re-sorted by descending sum.
        """
        self._check_live()
        other._check_live()
        if other is self:
            raise InternalInvariantViolation('Cannot merge a candidate into itself')
        if len(self._buckets) != len(other._buckets):
            raise ShapeMismatch(f'Cannot merge a {len(other._buckets)}-bucket candidate '
                                f'into a {len(self._buckets)}-bucket candidate')

        for bucket, other_bucket in zip(self._buckets, reversed(other._buckets)):
            bucket.merge(other_bucket)
        self._buckets.sort(key=lambda b: b.sum, reverse=True)

        other._buckets = []
        other._consumed = True

    def __len__(self):
        return self.k

    def __iter__(self):
        self._check_live()
        return iter(self._buckets)

    def __getitem__(self, index):
        self._check_live()
        return self._buckets[index]

    def __str__(self):
        return f'{self.k} buckets: ' + ','.join(f'[{s}]' for s in self.sums)

    def __repr__(self):
        if self._consumed:
            return 'PartitionCandidate(<consumed>)'
        return 'PartitionCandidate([' + ', '.join(str(b) for b in self._buckets) + f'], spread={self.spread})'
