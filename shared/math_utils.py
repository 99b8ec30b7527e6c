"""
Keysmith Statistical Utilities
===============================

NumPy-backed estimators used to audit the output of a random source:
Shannon and min-entropy of a sample, symbol histograms, and Pearson's
chi-squared goodness-of-fit test against a uniform distribution.

References:
    [1] Shannon, C. E. (1948). A Mathematical Theory of Communication.
        Bell System Technical Journal, 27(3), 379-423.
    [2] NIST SP 800-90B (2018). Recommendation for the Entropy Sources
        Used for Random Bit Generation.
    [3] Pearson, K. (1900). On the Criterion that a Given System of
        Deviations ... Philosophical Magazine, 50(302), 157-175.
    [4] Press, W. H. et al. (2007). Numerical Recipes (3rd ed.).
        Cambridge University Press, Section 6.2.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

FloatArray = NDArray[np.floating]


# ========================== Histograms =====================================


def frequency_distribution(
    values: bytes | Sequence[int] | NDArray[np.integer], bins: int = 256
) -> FloatArray:
    """Count occurrences of each symbol ``0 .. bins - 1``.

    Args:
        values: Byte string or integer samples, each in ``[0, bins)``.
        bins:   Alphabet size; 256 for raw bytes.

    Returns:
        1-D float64 array of length *bins* holding occurrence counts.

    Raises:
        ValueError: If *bins* is not positive or a sample falls outside
            ``[0, bins)``.
    """
    if bins < 1:
        raise ValueError("bins must be positive")
    if isinstance(values, (bytes, bytearray)):
        arr = np.frombuffer(bytes(values), dtype=np.uint8).astype(np.int64)
    else:
        arr = np.asarray(values, dtype=np.int64)
    if arr.size == 0:
        return np.zeros(bins, dtype=np.float64)
    if arr.min() < 0 or arr.max() >= bins:
        raise ValueError(f"samples must lie in [0, {bins})")
    return np.bincount(arr, minlength=bins).astype(np.float64)


# ========================== Entropy Measures ===============================


def shannon_entropy(counts: FloatArray) -> float:
    """Shannon entropy, in bits per symbol, of a histogram.

    .. math::

        H = -\\sum_i p_i \\, \\log_2(p_i)

    Returns 0.0 for an empty histogram. The maximum is ``log2(len(counts))``
    for a perfectly uniform sample.
    """
    counts = np.asarray(counts, dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        return 0.0
    p = counts[counts > 0] / total
    return float(-np.sum(p * np.log2(p)))


def min_entropy(counts: FloatArray) -> float:
    """Min-entropy ``-log2(max p_i)`` of a histogram, in bits per symbol.

    The most conservative estimator; NIST SP 800-90B section 6.3.
    """
    counts = np.asarray(counts, dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        return 0.0
    return float(-math.log2(counts.max() / total))


# ========================== Goodness of Fit ================================


def chi_squared_test(
    observed: FloatArray, expected: FloatArray
) -> tuple[float, float]:
    """Pearson's chi-squared goodness-of-fit test.

    .. math::

        \\chi^2 = \\sum_i \\frac{(O_i - E_i)^2}{E_i}

    The p-value is ``Q(dof / 2, chi2 / 2)``, the regularised upper
    incomplete gamma function, which equals ``scipy.stats.chi2.sf``.

    Returns:
        Tuple of ``(chi2_statistic, p_value)``.

    Raises:
        ValueError: If shapes differ or an expected count is not positive.
    """
    observed = np.asarray(observed, dtype=np.float64)
    expected = np.asarray(expected, dtype=np.float64)

    if observed.shape != expected.shape:
        raise ValueError("observed and expected must have the same shape")
    if np.any(expected <= 0):
        raise ValueError("expected counts must be > 0")

    chi2 = float(np.sum((observed - expected) ** 2 / expected))
    dof = observed.size - 1
    if dof <= 0:
        return chi2, 1.0
    return chi2, _upper_inc_gamma_reg(dof / 2.0, chi2 / 2.0)


def uniform_chi_squared(counts: FloatArray) -> tuple[float, float]:
    """Chi-squared test of *counts* against the uniform distribution."""
    counts = np.asarray(counts, dtype=np.float64)
    total = counts.sum()
    if total <= 0:
        raise ValueError("cannot test an empty sample")
    expected = np.full(counts.shape, total / counts.size)
    return chi_squared_test(counts, expected)


# --------------- Incomplete gamma (Numerical Recipes, Ch. 6) ---------------


def _upper_inc_gamma_reg(a: float, x: float) -> float:
    """Q(a, x) = 1 - P(a, x): series below ``a + 1``, continued fraction above."""
    if x <= 0.0 or a <= 0.0:
        return 1.0
    if x < a + 1.0:
        return max(0.0, 1.0 - _gamma_p_series(a, x))
    return _gamma_q_cf(a, x)


def _gamma_p_series(a: float, x: float) -> float:
    ap = a
    delta = total = 1.0 / a
    for _ in range(500):
        ap += 1.0
        delta *= x / ap
        total += delta
        if abs(delta) < abs(total) * 1e-15:
            break
    return total * math.exp(-x + a * math.log(x) - math.lgamma(a))


def _gamma_q_cf(a: float, x: float) -> float:
    # Modified Lentz evaluation.
    tiny = 1e-300
    b = x + 1.0 - a
    c = 1.0 / tiny
    d = 1.0 / b
    f = d
    for i in range(1, 500):
        an = -i * (i - a)
        b += 2.0
        d = an * d + b
        if abs(d) < tiny:
            d = tiny
        c = b + an / c
        if abs(c) < tiny:
            c = tiny
        d = 1.0 / d
        delta = d * c
        f *= delta
        if abs(delta - 1.0) < 1e-15:
            break
    return f * math.exp(-x + a * math.log(x) - math.lgamma(a))
