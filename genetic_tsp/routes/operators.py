"""
Permutation-preserving operators on tours held as 1-D numpy integer arrays.

Every operator returns a fresh array and leaves its inputs untouched.
"""

import random
from typing import Callable, Dict, Optional

import numpy as np

from .subsequence import Subsequence


MutationOperator = Callable[[np.ndarray, int, int], np.ndarray]


def random_permutation(n: int, rng: random.Random) -> np.ndarray:
    perm = list(range(n))
    rng.shuffle(perm)
    return np.array(perm, dtype=np.int64)


def is_permutation(tour, n: Optional[int] = None) -> bool:
    arr = np.asarray(tour)
    if arr.ndim != 1:
        return False
    if n is None:
        n = arr.size
    if arr.size != n:
        return False
    return bool(np.array_equal(np.sort(arr), np.arange(n)))


def _check_position(n: int, pos: int) -> None:
    if not 0 <= pos < n:
        raise IndexError(f"Position {pos} out of range for tour of length {n}.")


def ordered_crossover(parent_a: np.ndarray, parent_b: np.ndarray, start: int, end: int) -> np.ndarray:
    """
    Ordered crossover (OX).

    The child keeps parent_a[start:end] in place. The remaining nodes are taken
    from parent_b in the order met when walking it from `end` with wrap-around,
    and are written to positions end..n-1 and then 0..start-1.
    """
    parent_a = np.asarray(parent_a)
    parent_b = np.asarray(parent_b)
    n = len(parent_a)
    if len(parent_b) != n:
        raise ValueError(f"Parents differ in length ({n} != {len(parent_b)}).")
    if not is_permutation(parent_a) or not np.array_equal(np.sort(parent_a), np.sort(parent_b)):
        raise ValueError("Parents are not permutations of the same nodes.")
    donor = Subsequence(parent_a, start, end)
    other = Subsequence(parent_b, start, end)

    taken = np.zeros(n, dtype=bool)
    taken[donor.within] = True
    walk = other.rotated()
    fill = walk[~taken[walk]]

    child = np.empty(n, dtype=parent_a.dtype)
    child[start:end] = donor.within
    child[end:] = fill[: n - end]
    child[:start] = fill[n - end :]
    return child


def swap(tour: np.ndarray, pos_a: int, pos_b: int) -> np.ndarray:
    n = len(tour)
    _check_position(n, pos_a)
    _check_position(n, pos_b)
    out = np.array(tour, copy=True)
    out[pos_a], out[pos_b] = out[pos_b], out[pos_a]
    return out


def inversion(tour: np.ndarray, pos_a: int, pos_b: int) -> np.ndarray:
    """Reverse the segment between the two positions, both ends included."""
    n = len(tour)
    _check_position(n, pos_a)
    _check_position(n, pos_b)
    i, j = sorted((pos_a, pos_b))
    out = np.array(tour, copy=True)
    out[i : j + 1] = out[i : j + 1][::-1]
    return out


def insertion(tour: np.ndarray, pos_a: int, pos_b: int) -> np.ndarray:
    """Move the node at pos_a so that it ends up at pos_b."""
    n = len(tour)
    _check_position(n, pos_a)
    _check_position(n, pos_b)
    out = list(tour)
    node = out.pop(pos_a)
    out.insert(pos_b, node)
    return np.array(out, dtype=np.asarray(tour).dtype)


MUTATION_POLICIES: Dict[str, MutationOperator] = {
    "swap": swap,
    "inversion": inversion,
    "insertion": insertion,
}
