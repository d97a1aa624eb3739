"""
Alea Statistics
================

Contingency tables, Pearson's chi-squared test, the chi-squared survival
function approximation, and sampler uniformity validation.
"""

from alea.stats.chi_squared import ChiSquaredEngine
from alea.stats.contingency import ContingencyTable, degrees_of_freedom_for
from alea.stats.pvalue import chi_squared_p_value, standard_normal_cdf
from alea.stats.uniformity import UniformityChecker

__all__ = [
    "ChiSquaredEngine",
    "ContingencyTable",
    "degrees_of_freedom_for",
    "chi_squared_p_value",
    "standard_normal_cdf",
    "UniformityChecker",
]
