"""In-place sorting and selection algorithms over mutable sequences.

Every function takes an optional ``lt(a, b)`` predicate that returns true
when ``a`` orders strictly before ``b``; it defaults to ``operator.lt``.
"""

from __future__ import annotations

import operator
import random
from itertools import chain
from typing import Any, Callable, MutableSequence, Optional

LessThan = Callable[[Any, Any], bool]

RS_MIN_SIZE = 64
RS_MAX_BITS = 8

_SHRINK_FACTOR = 1.2473309501039786540366528676643
_INTRO_CUTOFF = 16


def _less(lt: Optional[LessThan]) -> LessThan:
    return operator.lt if lt is None else lt


def _swap(items: MutableSequence, i: int, j: int) -> None:
    items[i], items[j] = items[j], items[i]


def _merge(left: list, right: list, lt: LessThan) -> list:
    """Merge two sorted runs, taking from ``left`` on ties (stable)."""
    merged = []
    i = j = 0
    while i < len(left) and j < len(right):
        if lt(right[j], left[i]):
            merged.append(right[j])
            j += 1
        else:
            merged.append(left[i])
            i += 1
    merged.extend(left[i:])
    merged.extend(right[j:])
    return merged


def mergesort(items: MutableSequence, lt: Optional[LessThan] = None) -> None:
    """Stable bottom-up merge sort, in place."""
    lt = _less(lt)
    n = len(items)
    run = list(items)
    step = 1
    while step < n:
        merged = []
        for start in range(0, n, step << 1):
            left = run[start:start + step]
            right = run[start + step:start + (step << 1)]
            merged.extend(_merge(left, right, lt))
        run = merged
        step <<= 1
    items[:] = run


def heap_adjust(items: MutableSequence, i: int, n: int, lt: Optional[LessThan] = None) -> None:
    """Sift ``items[i]`` down within the max-heap formed by ``items[:n]``."""
    lt = _less(lt)
    tmp = items[i]
    k = i
    while (k := (k << 1) + 1) < n:
        if k != n - 1 and lt(items[k], items[k + 1]):
            k += 1
        if lt(items[k], tmp):
            break
        items[i] = items[k]
        i = k
    items[i] = tmp


def heap_make(items: MutableSequence, lt: Optional[LessThan] = None) -> None:
    """Rearrange ``items`` into a max-heap."""
    lt = _less(lt)
    n = len(items)
    for i in range((n >> 1) - 1, -1, -1):
        heap_adjust(items, i, n, lt)


def heapsort(items: MutableSequence, lt: Optional[LessThan] = None) -> None:
    """Sort a sequence that already holds a max-heap (see ``heap_make``)."""
    lt = _less(lt)
    for i in range(len(items) - 1, 0, -1):
        _swap(items, 0, i)
        heap_adjust(items, 0, i, lt)


def _insertion_sort(items: MutableSequence, lo: int, hi: int, lt: LessThan) -> None:
    for i in range(lo + 1, hi):
        j = i
        while j > lo and lt(items[j], items[j - 1]):
            _swap(items, j, j - 1)
            j -= 1


def _combsort_range(items: MutableSequence, lo: int, hi: int, lt: LessThan) -> None:
    gap = hi - lo
    while True:
        if gap > 2:
            gap = int(gap / _SHRINK_FACTOR)
            if gap in (9, 10):
                gap = 11
        swapped = False
        for i in range(lo, hi - gap):
            j = i + gap
            if lt(items[j], items[i]):
                _swap(items, i, j)
                swapped = True
        if not (swapped or gap > 2):
            break
    if gap != 1:
        _insertion_sort(items, lo, hi, lt)


def combsort(items: MutableSequence, lt: Optional[LessThan] = None) -> None:
    """Comb sort, in place."""
    _combsort_range(items, 0, len(items), _less(lt))


def introsort(items: MutableSequence, lt: Optional[LessThan] = None) -> None:
    """Introspective quicksort, in place; falls back to comb sort when too deep."""
    lt = _less(lt)
    n = len(items)
    if n < 1:
        return
    if n == 2:
        if lt(items[1], items[0]):
            _swap(items, 0, 1)
        return
    depth = 2
    while (1 << depth) < n:
        depth += 1
    depth <<= 1
    stack: list[tuple[int, int, int]] = []
    s, t = 0, n - 1
    while True:
        if s < t:
            depth -= 1
            if depth == 0:
                _combsort_range(items, s, t + 1, lt)
                t = s
                continue
            i, j = s, t
            k = i + ((j - i) >> 1) + 1
            if lt(items[k], items[i]):
                if lt(items[k], items[j]):
                    k = j
            else:
                k = i if lt(items[j], items[i]) else j
            pivot = items[k]
            if k != t:
                _swap(items, k, t)
            while True:
                i += 1
                while lt(items[i], pivot):
                    i += 1
                j -= 1
                while i <= j and lt(pivot, items[j]):
                    j -= 1
                if j <= i:
                    break
                _swap(items, i, j)
            _swap(items, i, t)
            if i - s > t - i:
                if i - s > _INTRO_CUTOFF:
                    stack.append((s, i - 1, depth))
                s = i + 1 if t - i > _INTRO_CUTOFF else t
            else:
                if t - i > _INTRO_CUTOFF:
                    stack.append((i + 1, t, depth))
                t = i - 1 if i - s > _INTRO_CUTOFF else s
        elif stack:
            s, t, depth = stack.pop()
        else:
            _insertion_sort(items, 0, n, lt)
            return


def ksmall(items: MutableSequence, k: int, lt: Optional[LessThan] = None) -> Any:
    """Return the ``k``-th smallest element (0-based), partially reordering ``items``."""
    lt = _less(lt)
    n = len(items)
    if not 0 <= k < n:
        raise IndexError(f"k={k} out of range for {n} items")
    low, high = 0, n - 1
    while True:
        if high <= low:
            return items[k]
        if high == low + 1:
            if lt(items[high], items[low]):
                _swap(items, low, high)
            return items[k]
        mid = low + (high - low) // 2
        if lt(items[high], items[mid]):
            _swap(items, mid, high)
        if lt(items[high], items[low]):
            _swap(items, low, high)
        if lt(items[low], items[mid]):
            _swap(items, mid, low)
        _swap(items, mid, low + 1)
        ll, hh = low + 1, high
        while True:
            ll += 1
            while lt(items[ll], items[low]):
                ll += 1
            hh -= 1
            while lt(items[low], items[hh]):
                hh -= 1
            if hh < ll:
                break
            _swap(items, ll, hh)
        _swap(items, low, hh)
        if hh <= k:
            low = ll
        if hh >= k:
            high = hh - 1


def shuffle(items: MutableSequence, rng: Any = None) -> None:
    """Fisher-Yates shuffle in place; ``rng`` needs a ``random()`` method."""
    rand = (rng or random).random
    for i in range(len(items), 1, -1):
        j = int(rand() * i)
        _swap(items, j, i - 1)


def sample(items: MutableSequence, r: int, rng: Any = None) -> None:
    """Move a uniform random ``r``-subset of ``items`` to the front.

    The chosen elements keep their original relative order.
    """
    n = len(items)
    if not 0 <= r <= n:
        raise ValueError(f"sample size {r} out of range for {n} items")
    rand = (rng or random).random
    pop = n
    for k, remaining in enumerate(range(r, 0, -1)):
        z = 1.0
        x = rand()
        while x < z:
            z -= z * remaining / pop
            pop -= 1
        chosen = n - pop - 1
        if k != chosen:
            _swap(items, k, chosen)


def _rs_insertion_sort(items: MutableSequence, key: Callable[[Any], int]) -> None:
    for i in range(1, len(items)):
        current = items[i]
        current_key = key(current)
        if current_key < key(items[i - 1]):
            j = i
            while j > 0 and current_key < key(items[j - 1]):
                items[j] = items[j - 1]
                j -= 1
            items[j] = current


def _rs_sort(items: list, key: Callable[[Any], int], n_bits: int, shift: int) -> list:
    mask = (1 << n_bits) - 1
    buckets: list[list] = [[] for _ in range(1 << n_bits)]
    for item in items:
        buckets[(key(item) >> shift) & mask].append(item)
    if shift:
        shift = shift - n_bits if shift > n_bits else 0
        for index, bucket in enumerate(buckets):
            if len(bucket) > RS_MIN_SIZE:
                buckets[index] = _rs_sort(bucket, key, n_bits, shift)
            elif len(bucket) > 1:
                _rs_insertion_sort(bucket, key)
    return list(chain.from_iterable(buckets))


def radix_sort(
    items: MutableSequence,
    key: Optional[Callable[[Any], int]] = None,
    key_bytes: int = 4,
) -> None:
    """Most-significant-digit radix sort on unsigned integer keys, in place.

    ``key`` maps an element to an integer in ``[0, 256 ** key_bytes)``;
    without it the elements themselves must be integers.
    """
    if key_bytes < 1:
        raise ValueError("key_bytes must be positive")
    if key is None:
        key = operator.index
    limit = 1 << (RS_MAX_BITS * key_bytes)
    for item in items:
        value = key(item)
        if not 0 <= value < limit:
            raise ValueError(f"key {value} does not fit in {key_bytes} unsigned bytes")
    if len(items) <= RS_MIN_SIZE:
        _rs_insertion_sort(items, key)
    else:
        items[:] = _rs_sort(list(items), key, RS_MAX_BITS, (key_bytes - 1) * RS_MAX_BITS)