"""Tests for UniformIntegerSampler."""

from __future__ import annotations

import numpy as np
import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from alea.core.errors import ExhaustedSourceError, InvalidArgumentError
from alea.sampling import U32_MAX, UniformIntegerSampler
from alea.sources import FixedByteSource, SecureByteSource


class TestByteOrder:
    def test_uint32_is_little_endian(self):
        sampler = UniformIntegerSampler(FixedByteSource(b"\x01\x00\x00\x00"))
        assert sampler.sample_uint32() == 1

    def test_uint32_high_byte(self):
        sampler = UniformIntegerSampler(FixedByteSource(b"\x00\x00\x00\x80"))
        assert sampler.sample_uint32() == 0x80000000


class TestRejection:
    def test_max_draw_rejected_for_bound_three(self, fixed_sampler):
        sampler = fixed_sampler(0xFFFFFFFF, 7)
        assert sampler.sample_below(3) == 1
        assert sampler.source.remaining == 0

    def test_threshold_is_rejected(self, fixed_sampler):
        # U32_MAX % 10 == 5, so the threshold is U32_MAX - 5
        threshold = U32_MAX - 5
        sampler = fixed_sampler(threshold, threshold - 1)
        assert sampler.sample_below(10) == 9

    def test_below_threshold_accepted_first_time(self, fixed_sampler):
        sampler = fixed_sampler(23, 99)
        assert sampler.sample_below(10) == 3
        assert sampler.source.remaining == 4

    def test_bound_one_always_zero(self, fixed_sampler):
        assert fixed_sampler(12345).sample_below(1) == 0

    def test_bound_one_rejects_all_ones(self, fixed_sampler):
        sampler = fixed_sampler(U32_MAX, 8)
        assert sampler.sample_below(1) == 0
        assert sampler.source.remaining == 0

    def test_largest_bound(self, fixed_sampler):
        assert fixed_sampler(U32_MAX - 1).sample_below(U32_MAX) == U32_MAX - 1

    def test_exhausted_during_rejection(self, fixed_sampler):
        sampler = fixed_sampler(0xFFFFFFFF)
        with pytest.raises(ExhaustedSourceError):
            sampler.sample_below(3)


class TestBoundValidation:
    @pytest.mark.parametrize("bound", [0, -1, U32_MAX + 1])
    def test_out_of_range(self, bound):
        sampler = UniformIntegerSampler(FixedByteSource(b""))
        with pytest.raises(InvalidArgumentError):
            sampler.sample_below(bound)

    @pytest.mark.parametrize("bound", [2.5, "6", True, None])
    def test_non_integer(self, bound):
        sampler = UniformIntegerSampler(FixedByteSource(b""))
        with pytest.raises(InvalidArgumentError):
            sampler.sample_below(bound)

    def test_invalid_argument_is_value_error(self):
        sampler = UniformIntegerSampler(FixedByteSource(b""))
        with pytest.raises(ValueError):
            sampler.sample_below(0)


@settings(max_examples=200, deadline=None)
@given(bound=st.integers(min_value=1, max_value=2**31))
def test_sample_below_in_range(bound):
    sampler = UniformIntegerSampler(SecureByteSource())
    for _ in range(5):
        assert 0 <= sampler.sample_below(bound) < bound


def test_short_read_detected():
    class ShortSource(FixedByteSource):
        def _read(self, count):
            return super()._read(count)[:-1]

    sampler = UniformIntegerSampler(ShortSource(bytes(8)))
    with pytest.raises(ExhaustedSourceError):
        sampler.sample_uint32()


class TestDistribution:
    def test_sample_below_mean_and_span(self, secure_sampler):
        draws = np.array([secure_sampler.sample_below(100) for _ in range(200_000)])
        assert draws.min() == 0
        assert draws.max() == 99
        assert abs(draws.mean() - 49.5) < 0.3

    def test_sample_double_mean_and_span(self, secure_sampler):
        draws = np.array([secure_sampler.sample_double() for _ in range(200_000)])
        assert draws.min() >= 0.0
        assert draws.max() < 1.0
        assert draws.min() < 0.001
        assert draws.max() > 0.999
        assert abs(draws.mean() - 0.5) < 0.005


class TestSampleDouble:
    def test_all_zero_bytes(self):
        sampler = UniformIntegerSampler(FixedByteSource(bytes(8)))
        assert sampler.sample_double() == 0.0

    def test_all_one_bytes_stays_below_one(self):
        sampler = UniformIntegerSampler(FixedByteSource(b"\xff" * 8))
        assert sampler.sample_double() == (2**53 - 1) / 2**53

    def test_consumes_eight_bytes(self):
        source = FixedByteSource(bytes(12))
        UniformIntegerSampler(source).sample_double()
        assert source.remaining == 4


class TestPickFrom:
    def test_picks_indexed_element(self, fixed_sampler):
        assert fixed_sampler(2).pick_from("abcd") == "c"

    def test_empty_sequence(self, fixed_sampler):
        with pytest.raises(InvalidArgumentError):
            fixed_sampler().pick_from([])
