"""Shared fixtures for the Alea test suite."""

from __future__ import annotations

import pytest

from alea_common.config import AleaConfig, get_config
from alea.sampling import FisherYatesShuffler, UniformIntegerSampler
from alea.sources import FixedByteSource, SecureByteSource, SeededByteSource

SEED = bytes.fromhex("0001020304050607")

REFERENCE_GRID = [
    [90, 60, 104, 95],
    [30, 50, 51, 20],
    [30, 40, 45, 35],
]

DICE_FREQUENCIES = [5, 8, 9, 8, 10, 20]


def u32(*values: int) -> bytes:
    """Little-endian encoding of 32-bit draws, as the sampler reads them."""
    return b"".join(v.to_bytes(4, "little") for v in values)


@pytest.fixture(autouse=True)
def _reset_config_cache():
    """Forget any configuration cached by :func:`get_config`."""
    yield
    if hasattr(get_config, "_cached"):
        del get_config._cached


@pytest.fixture
def secure_sampler() -> UniformIntegerSampler:
    return UniformIntegerSampler(SecureByteSource())


@pytest.fixture
def fast_seeded_source() -> SeededByteSource:
    """Seeded stream with a single PBKDF2 iteration per block."""
    return SeededByteSource(SEED, iterations=1)


@pytest.fixture
def fixed_sampler():
    """Factory: sampler replaying the given 32-bit draws."""

    def make(*values: int) -> UniformIntegerSampler:
        return UniformIntegerSampler(FixedByteSource(u32(*values)))

    return make


@pytest.fixture
def shuffler_for():
    def make(seed: bytes, iterations: int = 1) -> FisherYatesShuffler:
        source = SeededByteSource(seed, iterations=iterations)
        return FisherYatesShuffler(UniformIntegerSampler(source))

    return make


@pytest.fixture
def fast_config() -> AleaConfig:
    """Default config with cheap seeded streams and hashes."""
    config = AleaConfig()
    config.sampling.seed_iterations = 1
    config.hashing.iterations = 1000
    return config
