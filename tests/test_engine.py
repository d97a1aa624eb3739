"""Tests for the AleaEngine facade."""

from __future__ import annotations

import pytest

from alea.core.engine import AleaEngine
from alea.core.errors import HashFormatError, InvalidArgumentError
from alea.sources import SecureByteSource, SeededByteSource
from tests.conftest import DICE_FREQUENCIES, REFERENCE_GRID, SEED


@pytest.fixture
def engine(fast_config) -> AleaEngine:
    return AleaEngine(fast_config)


def test_make_source(engine):
    assert isinstance(engine.make_source(), SecureByteSource)
    seeded = engine.make_source(SEED)
    assert isinstance(seeded, SeededByteSource)
    assert seeded.iterations == 1


def test_make_source_enforces_min_seed(engine):
    with pytest.raises(InvalidArgumentError):
        engine.make_source(b"short")


def test_chi_squared_single_row(engine):
    result = engine.chi_squared([DICE_FREQUENCIES])
    assert result.statistic == 13.4
    assert result.degrees_of_freedom == 5
    assert result.alpha == 0.05
    assert result.significant


def test_chi_squared_grid_with_alpha(engine):
    result = engine.chi_squared(REFERENCE_GRID, alpha=0.0001)
    assert (result.width, result.height) == (4, 3)
    assert result.degrees_of_freedom == 6
    assert not result.significant


def test_sample_is_reproducible_with_seed(engine):
    first = engine.sample(1000, count=20, seed=SEED)
    second = engine.sample(1000, count=20, seed=SEED)
    assert first.values == second.values
    assert first.seeded
    assert all(0 <= v < 1000 for v in first.values)


def test_sample_unseeded(engine):
    result = engine.sample(6, count=50)
    assert not result.seeded
    assert len(result.values) == 50
    assert set(result.values) <= set(range(6))


def test_shuffle(engine):
    items = [str(i) for i in range(20)]
    first = engine.shuffle(items, seed=SEED)
    assert sorted(first.items) == sorted(items)
    assert engine.shuffle(items, seed=SEED).items == first.items


def test_check_uniformity_uses_config_defaults(engine, fast_config):
    fast_config.stats.uniformity_trials = 5
    fast_config.stats.uniformity_samples = 60
    report = engine.check_uniformity(seed=SEED)
    assert report.trials == 5
    assert report.samples_per_trial == 60
    assert report.bound == fast_config.stats.uniformity_bound
    assert report.alpha == fast_config.stats.uniformity_alpha


def test_check_uniformity_overrides(engine):
    report = engine.check_uniformity(bound=3, samples=30, trials=4, seed=SEED)
    assert (report.bound, report.samples_per_trial, report.trials) == (3, 30, 4)


def test_hash_and_verify(engine):
    stored = engine.hash_password("hunter2")
    assert stored.startswith("sha1:1000:18:")
    ok = engine.verify_password("hunter2", stored)
    assert ok.valid
    assert ok.iterations == 1000
    assert ok.algorithm == "sha1"
    assert not engine.verify_password("hunter3", stored).valid


def test_verify_malformed(engine):
    with pytest.raises(HashFormatError):
        engine.verify_password("pw", "not-a-hash")
