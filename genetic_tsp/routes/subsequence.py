from typing import Tuple

import numpy as np


Span = Tuple[int, int]


class Subsequence:
    """
    Non-owning view splitting a sequence at two cut points.

    `before` is sequence[0:start], `within` is sequence[start:end] and `after`
    is sequence[end:n]. Each part is a numpy view into the same buffer, stored
    as an (offset, length) span.
    """

    __slots__ = ("sequence", "start", "end")

    def __init__(self, sequence: np.ndarray, start: int, end: int):
        n = len(sequence)
        if not 0 <= start <= end <= n:
            raise IndexError(f"Invalid cut points start={start}, end={end} for length {n}.")
        self.sequence = np.asarray(sequence)
        self.start = start
        self.end = end

    @property
    def spans(self) -> Tuple[Span, Span, Span]:
        n = len(self.sequence)
        return (0, self.start), (self.start, self.end - self.start), (self.end, n - self.end)

    def _view(self, span: Span) -> np.ndarray:
        offset, length = span
        return self.sequence[offset : offset + length]

    @property
    def before(self) -> np.ndarray:
        return self._view(self.spans[0])

    @property
    def within(self) -> np.ndarray:
        return self._view(self.spans[1])

    @property
    def after(self) -> np.ndarray:
        return self._view(self.spans[2])

    def rotated(self) -> np.ndarray:
        # Wrap-around walk starting at `end`: after, before, within.
        return np.concatenate([self.after, self.before, self.within])

    def __repr__(self) -> str:
        return f"Subsequence(start={self.start}, end={self.end}, n={len(self.sequence)})"
