"""
Alea Configuration Management
==============================

Centralized configuration for the Alea toolkit using Python dataclasses
and TOML-based persistence.

Architecture follows the Twelve-Factor App methodology for configuration
management (Wiggins, 2011), separating config from code.

References:
    - Wiggins, A. (2011). The Twelve-Factor App. https://12factor.net/
    - TOML v1.0.0 Specification. https://toml.io/en/v1.0.0
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


# ---------------------------------------------------------------------------
# Default configuration file path relative to the project root
# ---------------------------------------------------------------------------
_DEFAULT_CONFIG_PATH: Path = Path(__file__).resolve().parent.parent / "alea.toml"


# ========================== Section Configs ================================


@dataclass(frozen=False, slots=True)
class SamplingConfig:
    """Configuration for byte sources and the uniform sampler.

    ``seed_iterations`` is the PBKDF2 iteration count used by the seeded
    byte source; ``min_seed_bytes`` is the shortest seed it accepts.
    """

    seed_iterations: int = 1000
    min_seed_bytes: int = 8


@dataclass(frozen=False, slots=True)
class StatsConfig:
    """Configuration for chi-squared testing and sampler self-validation.

    Reference:
        Pearson, K. (1900). On the Criterion that a Given System of
        Deviations from the Probable ... Philosophical Magazine, 50(302).
    """

    significance: float = 0.05
    uniformity_alpha: float = 0.005
    uniformity_bound: int = 6
    uniformity_samples: int = 600
    uniformity_trials: int = 200
    required_pass_rate: float = 0.99


@dataclass(frozen=False, slots=True)
class HashingConfig:
    """PBKDF2-HMAC-SHA1 password hashing parameters.

    Reference:
        RFC 8018 (2017). PKCS #5: Password-Based Cryptography
        Specification Version 2.1.
    """

    salt_bytes: int = 24
    iterations: int = 64000
    hash_bytes: int = 18


@dataclass(frozen=False, slots=True)
class GlobalConfig:
    """Global settings: logging verbosity, log destination, debug mode."""

    log_level: str = "INFO"
    log_file: str = ""
    log_json: bool = False
    debug: bool = False
    version: str = "1.0.0"


# =========================== Master Config =================================


@dataclass(frozen=False, slots=True)
class AleaConfig:
    """Master configuration aggregating every section.

    Usage:
        >>> config = AleaConfig.load()                  # from default path
        >>> config = AleaConfig.load("custom.toml")     # from custom path
        >>> config.hashing.iterations
        64000
    """

    global_settings: GlobalConfig = field(default_factory=GlobalConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    hashing: HashingConfig = field(default_factory=HashingConfig)

    # ------------------------------------------------------------------ #
    #  TOML Loading
    # ------------------------------------------------------------------ #

    @classmethod
    def load(cls, path: str | Path | None = None) -> AleaConfig:
        """Load configuration from a TOML file.

        If *path* is ``None`` the loader looks for ``alea.toml`` in the
        project root.  Missing keys fall back to dataclass defaults.

        Args:
            path: Filesystem path to a TOML configuration file.

        Returns:
            A fully-populated :class:`AleaConfig` instance.

        Raises:
            FileNotFoundError: If the specified path does not exist
                *and* was explicitly provided by the caller.
        """
        config_path = Path(path) if path is not None else _DEFAULT_CONFIG_PATH

        if not config_path.exists():
            if path is not None:
                raise FileNotFoundError(
                    f"Configuration file not found: {config_path}"
                )
            return cls()

        with open(config_path, "rb") as fh:
            raw: dict[str, Any] = tomllib.load(fh)

        return cls(
            global_settings=cls._build_section(GlobalConfig, raw.get("global", {})),
            sampling=cls._build_section(SamplingConfig, raw.get("sampling", {})),
            stats=cls._build_section(StatsConfig, raw.get("stats", {})),
            hashing=cls._build_section(HashingConfig, raw.get("hashing", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise the entire configuration tree to a plain dictionary."""
        return asdict(self)

    @staticmethod
    def _build_section(cls: type, data: dict[str, Any]) -> Any:
        """Instantiate a dataclass *cls* using only the keys it declares.

        Unknown keys in the TOML source are ignored.
        """
        valid_keys = {f.name for f in cls.__dataclass_fields__.values()}  # type: ignore[attr-defined]
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered)


def get_config(path: str | Path | None = None) -> AleaConfig:
    """Module-level convenience wrapper around :meth:`AleaConfig.load`.

    Caches the result so that repeated calls share one instance.
    """
    if not hasattr(get_config, "_cached") or path is not None:
        get_config._cached = AleaConfig.load(path)  # type: ignore[attr-defined]
    return get_config._cached  # type: ignore[attr-defined]
