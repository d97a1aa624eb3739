"""
Alea -- Unbiased Randomness and Chi-Squared Validation
=======================================================

Cryptographically secure byte sources, modulo-bias-free integer
sampling, Fisher-Yates shuffling, Pearson's chi-squared test with a
closed-form p-value approximation, and PBKDF2 password hashing.

Modules:
    - alea.sources: Random byte sources (secure, seeded, fixed, locked)
    - alea.sampling: Uniform integer sampler and shuffler
    - alea.stats: Contingency tables, chi-squared engine, p-values
    - alea.hashing: PBKDF2-HMAC-SHA1 password hashing
    - alea.core: Errors, Pydantic models and the engine facade
    - alea.output: Console output
    - alea.cli: Click-based command-line interface

References:
    - Knuth, D. E. (1997). The Art of Computer Programming, Vol. 2:
      Seminumerical Algorithms, 3rd ed., Section 3.4.2.
    - Pearson, K. (1900). On the criterion that a given system of
      deviations from the probable. Philosophical Magazine, 50(302).
    - Perlman, G. (1980). Statistical routines POCHISQ / POZ.
"""

__version__ = "1.0.0"
__tool_name__ = "alea"
