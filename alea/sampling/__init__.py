"""
Alea Sampling
==============

Unbiased integer/double sampling and Fisher-Yates shuffling on top of a
random byte source.
"""

from alea.sampling.sampler import U32_MAX, UniformIntegerSampler
from alea.sampling.shuffle import FisherYatesShuffler

__all__ = ["U32_MAX", "UniformIntegerSampler", "FisherYatesShuffler"]
