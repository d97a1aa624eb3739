"""
Fisher-Yates Shuffle
=====================

In-place uniform permutation (Durstenfeld's variant): walking from the
last index down to 1, swap each element with one chosen uniformly from
the positions not yet fixed.

The permutation is a pure function of the sampler's output stream and
the sequence *length*; element values never influence the swaps.

References:
    - Fisher, R. A. & Yates, F. (1938). Statistical Tables for
      Biological, Agricultural and Medical Research. Oliver & Boyd.
    - Durstenfeld, R. (1964). Algorithm 235: Random permutation.
      Communications of the ACM, 7(7), 420.
"""

from __future__ import annotations

from typing import Iterable, MutableSequence, TypeVar

from alea.sampling.sampler import UniformIntegerSampler

T = TypeVar("T")


class FisherYatesShuffler:
    """Shuffles sequences using an injected :class:`UniformIntegerSampler`.

    Usage::

        shuffler = FisherYatesShuffler(UniformIntegerSampler(SecureByteSource()))
        deck = list(range(52))
        shuffler.shuffle_in_place(deck)
    """

    def __init__(self, sampler: UniformIntegerSampler) -> None:
        self._sampler = sampler

    def shuffle_in_place(self, sequence: MutableSequence[T]) -> None:
        """Permute *sequence* uniformly at random, in place."""
        for i in range(len(sequence) - 1, 0, -1):
            j = self._sampler.sample_below(i + 1)
            sequence[i], sequence[j] = sequence[j], sequence[i]

    def shuffled(self, items: Iterable[T]) -> list[T]:
        """Return a shuffled copy of *items*."""
        out = list(items)
        self.shuffle_in_place(out)
        return out

    def shuffle_string(self, text: str) -> str:
        """Return the characters of *text* in a random order."""
        return "".join(self.shuffled(text))
