"""
Sampler Uniformity Validation
==============================

Statistical acceptance test for :class:`UniformIntegerSampler`: draw
``sample_below(bound)`` many times, bin the outcomes, and run a
chi-squared goodness-of-fit test against the uniform distribution.
Repeating the trial shows whether the rejection sampler is free of
modulo bias: an unbiased sampler fails a trial at level *alpha* with
probability *alpha*, so at ``alpha = 0.005`` at least 99 % of trials
should pass.

Reference:
    - Knuth, D. E. (1997). The Art of Computer Programming, Volume 2:
      Seminumerical Algorithms (3rd ed.), Section 3.3.1 (chi-square test).
"""

from __future__ import annotations

import numpy as np

from alea_common.logger import get_logger

from alea.core.errors import InvalidArgumentError
from alea.core.models import UniformityReport, UniformityTrial
from alea.sampling.sampler import UniformIntegerSampler
from alea.stats.chi_squared import ChiSquaredEngine

MAX_BOUND: int = 1 << 16
"""Largest *bound* accepted: one frequency bin is allocated per category."""


class UniformityChecker:
    """Runs repeated chi-squared trials over a sampler's output.

    Usage::

        checker = UniformityChecker(UniformIntegerSampler(SecureByteSource()))
        report = checker.run(bound=6, samples=600, trials=200)
        assert report.passed

    Args:
        sampler: Sampler under test.
        alpha:   Per-trial significance level; a trial passes when its
                 p-value exceeds *alpha*.
    """

    def __init__(self, sampler: UniformIntegerSampler, alpha: float = 0.005) -> None:
        if not 0.0 < alpha < 1.0:
            raise InvalidArgumentError(f"alpha must be in (0, 1), got {alpha}")
        self._sampler = sampler
        self._alpha = alpha
        self.logger = get_logger("uniformity")

    @property
    def alpha(self) -> float:
        return self._alpha

    def run_trial(self, bound: int, samples: int) -> UniformityTrial:
        """Draw *samples* values below *bound* and test them for uniformity.

        Raises:
            InvalidArgumentError: If *bound* is outside ``[2, MAX_BOUND]``
                or *samples* is not positive.
        """
        self._validate(bound, samples, 1)

        draws = np.fromiter(
            (self._sampler.sample_below(bound) for _ in range(samples)),
            dtype=np.int64,
            count=samples,
        )
        frequencies = np.bincount(draws, minlength=bound)
        engine = ChiSquaredEngine.from_frequencies(frequencies)

        return UniformityTrial(
            bound=bound,
            samples=samples,
            frequencies=frequencies.tolist(),
            statistic=engine.statistic,
            p_value=engine.p_value,
            passed=engine.p_value > self._alpha,
        )

    def run(
        self,
        bound: int,
        samples: int,
        trials: int,
        required_pass_rate: float = 0.99,
    ) -> UniformityReport:
        """Repeat :meth:`run_trial` *trials* times and aggregate.

        Returns:
            Report whose ``passed`` flag is ``pass_rate >= required_pass_rate``.
        """
        self._validate(bound, samples, trials)
        if not 0.0 <= required_pass_rate <= 1.0:
            raise InvalidArgumentError(
                f"required_pass_rate must be in [0, 1], got {required_pass_rate}"
            )

        with self.logger.operation("uniformity"):
            self.logger.debug(
                "Running %d trials of %d draws below %d", trials, samples, bound
            )
            results = [self.run_trial(bound, samples) for _ in range(trials)]

            trials_passed = sum(1 for r in results if r.passed)
            pass_rate = trials_passed / trials
            self.logger.debug(
                "Uniformity: %d/%d trials passed (rate %.4f)",
                trials_passed,
                trials,
                pass_rate,
            )

        return UniformityReport(
            bound=bound,
            samples_per_trial=samples,
            trials=trials,
            alpha=self._alpha,
            required_pass_rate=required_pass_rate,
            trials_passed=trials_passed,
            pass_rate=pass_rate,
            passed=pass_rate >= required_pass_rate,
            min_p_value=min(r.p_value for r in results),
            results=results,
        )

    @staticmethod
    def _validate(bound: int, samples: int, trials: int) -> None:
        if not 2 <= bound <= MAX_BOUND:
            raise InvalidArgumentError(
                f"bound must be in [2, {MAX_BOUND}], got {bound}"
            )
        if samples < 1:
            raise InvalidArgumentError(f"samples must be >= 1, got {samples}")
        if trials < 1:
            raise InvalidArgumentError(f"trials must be >= 1, got {trials}")
