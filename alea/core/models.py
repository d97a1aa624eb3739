"""
Alea Core Data Models
======================

Pydantic models for results produced by the Alea engine: chi-squared
tests, sampler uniformity validation, sampling, shuffling and password
hash verification.

All models are serialisable to JSON and consumed by both the CLI console
output and its ``--output json`` mode.

References:
    - Pearson, K. (1900). On the criterion that a given system of
      deviations from the probable. Philosophical Magazine, 50(302).
    - Pydantic v2 documentation. https://docs.pydantic.dev/latest/
"""

from __future__ import annotations

from pydantic import BaseModel, Field


# ===================================================================== #
#  Chi-Squared Models
# ===================================================================== #


class ChiSquaredResult(BaseModel):
    """Outcome of a chi-squared test on a contingency table.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        observed: Observed counts, one list per row.
        expected: Expected counts under the null hypothesis, one list per row.
        statistic: Chi-squared statistic.
        degrees_of_freedom: Degrees of freedom of the reference distribution.
        p_value: Probability of a statistic at least this large by chance.
        alpha: Significance level the verdict was taken at.
        significant: Whether ``p_value < alpha`` (null hypothesis rejected).
    """

    width: int
    height: int
    observed: list[list[float]] = Field(default_factory=list)
    expected: list[list[float]] = Field(default_factory=list)
    statistic: float = 0.0
    degrees_of_freedom: int = 0
    p_value: float = Field(default=1.0, ge=0.0, le=1.0)
    alpha: float = Field(default=0.05, gt=0.0, lt=1.0)
    significant: bool = False


# ===================================================================== #
#  Uniformity Models
# ===================================================================== #


class UniformityTrial(BaseModel):
    """One goodness-of-fit trial over ``sample_below(bound)`` output.

    Attributes:
        bound: Exclusive upper bound that was sampled.
        samples: Number of draws in the trial.
        frequencies: Count of each outcome ``0 .. bound-1``.
        statistic: Chi-squared statistic against the uniform distribution.
        p_value: Upper tail probability of the statistic.
        passed: Whether ``p_value > alpha``.
    """

    bound: int
    samples: int
    frequencies: list[int] = Field(default_factory=list)
    statistic: float = 0.0
    p_value: float = Field(default=1.0, ge=0.0, le=1.0)
    passed: bool = False


class UniformityReport(BaseModel):
    """Aggregate of repeated uniformity trials.

    Attributes:
        bound: Exclusive upper bound that was sampled.
        samples_per_trial: Draws per trial.
        trials: Number of trials executed.
        alpha: Per-trial significance level.
        required_pass_rate: Fraction of trials that must pass.
        trials_passed: Number of trials with ``p_value > alpha``.
        pass_rate: ``trials_passed / trials``.
        passed: Whether ``pass_rate >= required_pass_rate``.
        min_p_value: Smallest p-value seen across trials.
        results: Individual trial results.
    """

    bound: int
    samples_per_trial: int
    trials: int
    alpha: float
    required_pass_rate: float
    trials_passed: int = 0
    pass_rate: float = 0.0
    passed: bool = False
    min_p_value: float = 1.0
    results: list[UniformityTrial] = Field(default_factory=list)


# ===================================================================== #
#  Sampling / Shuffling / Hashing Models
# ===================================================================== #


class SampleResult(BaseModel):
    """Integers drawn with ``sample_below(bound)``."""

    bound: int
    values: list[int] = Field(default_factory=list)
    seeded: bool = False


class ShuffleResult(BaseModel):
    """A shuffled sequence and whether it came from a seeded source."""

    items: list[str] = Field(default_factory=list)
    seeded: bool = False


class HashVerification(BaseModel):
    """Result of checking a password against a stored hash string."""

    algorithm: str = ""
    iterations: int = 0
    valid: bool = False
