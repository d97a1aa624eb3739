"""
Alea Engine
============

Facade over the sampling, statistics and hashing subsystems.  The engine
turns configuration into concrete byte sources and returns Pydantic
result models, so the CLI (and any other front end) never wires the
pieces together itself.

Architecture follows the Facade pattern (Gamma et al., 1994).

References:
    - Gamma, E., Helm, R., Johnson, R., & Vlissides, J. (1994).
      Design Patterns: Elements of Reusable Object-Oriented Software.
      Addison-Wesley.
"""

from __future__ import annotations

from typing import Optional, Sequence

from alea_common.config import AleaConfig
from alea_common.logger import AleaLogger

from alea.core.models import (
    ChiSquaredResult,
    HashVerification,
    SampleResult,
    ShuffleResult,
    UniformityReport,
)
from alea.hashing.pbkdf2 import HashRecord, Pbkdf2Sha1Hash
from alea.sampling.sampler import UniformIntegerSampler
from alea.sampling.shuffle import FisherYatesShuffler
from alea.sources.base import RandomByteSource
from alea.sources.secure import SecureByteSource
from alea.sources.seeded import SeededByteSource
from alea.stats.chi_squared import ChiSquaredEngine
from alea.stats.uniformity import UniformityChecker


class AleaEngine:
    """Orchestrates every Alea operation.

    Each call that needs randomness builds its own byte source (seeded
    when *seed* is given, secure otherwise), so no source is ever shared
    between calls.

    Usage::

        engine = AleaEngine()
        engine.chi_squared([[90, 60, 104, 95], [30, 50, 51, 20], [30, 40, 45, 35]])
        engine.shuffle(["a", "b", "c"], seed=b"01234567")
        engine.check_uniformity()

    Attributes:
        config: Alea configuration instance.
        logger: Logger for the engine.
    """

    def __init__(
        self,
        config: Optional[AleaConfig] = None,
        logger: Optional[AleaLogger] = None,
    ) -> None:
        self.config = config or AleaConfig()
        settings = self.config.global_settings
        self.logger = logger or AleaLogger(
            "engine",
            log_level=settings.log_level,
            log_file=settings.log_file or None,
            json_logs=settings.log_json,
            console_output=settings.debug,
        )

    # ------------------------------------------------------------------ #
    #  Sources
    # ------------------------------------------------------------------ #

    def make_source(self, seed: Optional[bytes] = None) -> RandomByteSource:
        """Seeded source for *seed*, secure source when *seed* is ``None``."""
        if seed is None:
            return SecureByteSource()
        sampling = self.config.sampling
        return SeededByteSource(
            seed,
            iterations=sampling.seed_iterations,
            min_seed_bytes=sampling.min_seed_bytes,
        )

    # ------------------------------------------------------------------ #
    #  Statistics
    # ------------------------------------------------------------------ #

    def chi_squared(
        self,
        rows: Sequence[Sequence[float]],
        alpha: Optional[float] = None,
    ) -> ChiSquaredResult:
        """Chi-squared test of a grid; a single row is a goodness-of-fit test."""
        alpha = alpha if alpha is not None else self.config.stats.significance
        with self.logger.operation("chi_squared"):
            engine = ChiSquaredEngine.from_grid(rows)
            self.logger.info(
                "Chi-squared %.4f, df=%d, p=%.6f",
                engine.statistic,
                engine.degrees_of_freedom,
                engine.p_value,
            )
            return engine.to_result(alpha)

    def check_uniformity(
        self,
        bound: Optional[int] = None,
        samples: Optional[int] = None,
        trials: Optional[int] = None,
        seed: Optional[bytes] = None,
    ) -> UniformityReport:
        """Validate the sampler with repeated chi-squared trials.

        Unspecified parameters come from the ``[stats]`` config section.
        """
        stats = self.config.stats
        bound = bound if bound is not None else stats.uniformity_bound
        samples = samples if samples is not None else stats.uniformity_samples
        trials = trials if trials is not None else stats.uniformity_trials

        with self.logger.operation("uniformity"), self.logger.timed(
            f"uniformity check (bound={bound}, trials={trials})"
        ):
            with self.make_source(seed) as source:
                checker = UniformityChecker(
                    UniformIntegerSampler(source), alpha=stats.uniformity_alpha
                )
                report = checker.run(
                    bound, samples, trials, required_pass_rate=stats.required_pass_rate
                )
            if not report.passed:
                self.logger.warning(
                    "Sampler failed uniformity check: pass rate %.4f < %.4f",
                    report.pass_rate,
                    report.required_pass_rate,
                )
            return report

    # ------------------------------------------------------------------ #
    #  Randomness
    # ------------------------------------------------------------------ #

    def sample(
        self, bound: int, count: int = 1, seed: Optional[bytes] = None
    ) -> SampleResult:
        """Draw *count* integers in ``[0, bound)``."""
        with self.logger.operation("sample"), self.make_source(seed) as source:
            sampler = UniformIntegerSampler(source)
            values = [sampler.sample_below(bound) for _ in range(count)]
        return SampleResult(bound=bound, values=values, seeded=seed is not None)

    def shuffle(
        self, items: Sequence[str], seed: Optional[bytes] = None
    ) -> ShuffleResult:
        """Return *items* in a uniformly random order."""
        with self.logger.operation("shuffle"), self.make_source(seed) as source:
            shuffler = FisherYatesShuffler(UniformIntegerSampler(source))
            shuffled = shuffler.shuffled(items)
        self.logger.info("Shuffled %d items", len(shuffled))
        return ShuffleResult(items=shuffled, seeded=seed is not None)

    # ------------------------------------------------------------------ #
    #  Hashing
    # ------------------------------------------------------------------ #

    def hash_password(self, plain_text: str) -> str:
        """Hash *plain_text* with the ``[hashing]`` parameters."""
        cfg = self.config.hashing
        hasher = Pbkdf2Sha1Hash(
            salt_bytes=cfg.salt_bytes,
            iterations=cfg.iterations,
            hash_bytes=cfg.hash_bytes,
        )
        with self.logger.operation("hash"):
            return hasher.hash(plain_text)

    def verify_password(self, plain_text: str, hashed: str) -> HashVerification:
        """Check *plain_text* against a stored hash string."""
        record = HashRecord.parse(hashed)
        valid = Pbkdf2Sha1Hash.verify_hash(plain_text, hashed)
        with self.logger.operation("verify"):
            self.logger.info("Password verification %s", "succeeded" if valid else "failed")
        return HashVerification(
            algorithm=record.algorithm,
            iterations=record.iterations,
            valid=valid,
        )
