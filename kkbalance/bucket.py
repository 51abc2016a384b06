import numbers

from kkbalance.errors import InvalidInput, InternalInvariantViolation


def check_weight(weight) -> int:
    """
    Return `weight` as a plain int, or raise InvalidInput if it is not a
    non-negative integer. numpy integer scalars are accepted; bools are not.
    """
    if isinstance(weight, bool) or not isinstance(weight, numbers.Integral):
        raise InvalidInput(f'Weights must be integers, got {weight!r}')
    weight = int(weight)
    if weight < 0:
        raise InvalidInput(f'Weights must be non-negative, got {weight}')
    return weight


class _Node(object):
    __slots__ = ('weight', 'next')

    def __init__(self, weight):
        self.weight = weight
        self.next = None


class Bucket(object):
    """
    An ordered group of weights with a running sum.

    Weights are kept in a singly linked chain so that `merge` can splice
    another bucket's chain onto this one without copying. The bucket that was
    merged in is left empty and marked consumed.
    """

    __slots__ = ('_head', '_tail', '_len', '_sum', '_consumed')

    def __init__(self):
        self._head = None
        self._tail = None
        self._len = 0
        self._sum = 0
        self._consumed = False

    @classmethod
    def empty(cls):
        return cls()

    @classmethod
    def singleton(cls, weight):
        bucket = cls()
        bucket._head = bucket._tail = _Node(check_weight(weight))
        bucket._len = 1
        bucket._sum = bucket._head.weight
        return bucket

    def _check_live(self):
        if self._consumed:
            raise InternalInvariantViolation('Bucket was merged into another bucket and can no longer be used')

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def sum(self) -> int:
        self._check_live()
        return self._sum

    @property
    def weights(self) -> list:
        return list(self)

    def merge(self, other: 'Bucket'):
        """
        Append all of `other`'s weights after this bucket's weights and add
        its sum to ours. `other` is consumed.
        """
        self._check_live()
        other._check_live()
        if other is self:
            raise InternalInvariantViolation('Cannot merge a bucket into itself')
        if other._head is not None:
            if self._head is None:
                self._head = other._head
            else:
                self._tail.next = other._head
            self._tail = other._tail
        self._len += other._len
        self._sum += other._sum

        other._head = other._tail = None
        other._len = 0
        other._sum = 0
        other._consumed = True

    def __len__(self):
        self._check_live()
        return self._len

    def __iter__(self):
        self._check_live()
        node = self._head
        while node is not None:
            yield node.weight
            node = node.next

    def __str__(self):
        return '[' + ','.join(str(w) for w in self) + ']'

    def __repr__(self):
        if self._consumed:
            return 'Bucket(<consumed>)'
        return f'Bucket({self.weights}, sum={self._sum})'
