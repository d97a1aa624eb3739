"""
Alea Core Module
=================

Error taxonomy and Pydantic result models.  The engine facade lives in
:mod:`alea.core.engine`.
"""

from alea.core.errors import (
    AleaError,
    DegenerateDistributionError,
    DimensionMismatchError,
    ExhaustedSourceError,
    HashFormatError,
    InvalidArgumentError,
)
from alea.core.models import (
    ChiSquaredResult,
    HashVerification,
    SampleResult,
    ShuffleResult,
    UniformityReport,
    UniformityTrial,
)

__all__ = [
    "AleaError",
    "DegenerateDistributionError",
    "DimensionMismatchError",
    "ExhaustedSourceError",
    "HashFormatError",
    "InvalidArgumentError",
    "ChiSquaredResult",
    "HashVerification",
    "SampleResult",
    "ShuffleResult",
    "UniformityReport",
    "UniformityTrial",
]
