"""
Random Source Auditor
======================

Sanity checks for a :class:`RandomSource` before it is trusted with
password generation. A sample of raw bytes and a sample of alphabet
indices (``random_int(64)``, the draw the strong scheme makes) are
collected and tested:

1. Byte uniformity -- Pearson chi-squared over 256 bins.
2. Index uniformity -- Pearson chi-squared over 64 bins.
3. Frequency (Monobit) -- proportion of one bits in the byte sample.

Shannon and min-entropy per byte are reported alongside. Passing these
tests does not prove a generator is cryptographically secure; failing
them proves it is unfit.

References:
    - NIST SP 800-22 Rev. 1a (2010), Section 2.1.
    - NIST SP 800-90B (2018), Section 6.3.
    - Knuth, D. E. (1997). The Art of Computer Programming, Volume 2:
      Seminumerical Algorithms (3rd ed.), Section 3.3.1.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from shared.logger import KeysmithLogger
from shared.math_utils import (
    frequency_distribution,
    min_entropy,
    shannon_entropy,
    uniform_chi_squared,
)

from keysmith.core.models import RandomnessAudit, RandomnessTest
from keysmith.core.ports import RandomSource
from keysmith.domain.charsets import STRONG_ALPHABET

DEFAULT_SAMPLE_SIZE = 10_000
DEFAULT_SIGNIFICANCE = 0.01
# Below this many samples per bin the chi-squared approximation is poor.
MIN_SAMPLES_PER_BIN = 5


class RandomnessAuditor:
    """Runs the audit suite against any :class:`RandomSource`.

    Args:
        sample_size:  Bytes (and alphabet indices) drawn per audit.
        significance: Rejection threshold for every test.

    Raises:
        ValueError: If the sample is too small for a 256-bin test or the
            significance is outside ``(0, 1)``.
    """

    def __init__(
        self,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        significance: float = DEFAULT_SIGNIFICANCE,
        logger: Optional[KeysmithLogger] = None,
    ) -> None:
        if sample_size < 256 * MIN_SAMPLES_PER_BIN:
            raise ValueError(
                f"sample_size must be at least {256 * MIN_SAMPLES_PER_BIN}"
            )
        if not 0.0 < significance < 1.0:
            raise ValueError("significance must be between 0 and 1")
        self.sample_size = sample_size
        self.significance = significance
        self.logger = logger or KeysmithLogger("analyzers.randomness")

    async def audit(self, random_source: RandomSource) -> RandomnessAudit:
        with self.logger.timed(f"randomness audit ({self.sample_size} samples)"):
            data = await random_source.random_bytes(self.sample_size)
            indices = [
                await random_source.random_int(len(STRONG_ALPHABET))
                for _ in range(self.sample_size)
            ]

            byte_counts = frequency_distribution(data, 256)
            index_counts = frequency_distribution(indices, len(STRONG_ALPHABET))

            tests = [
                self._uniformity_test("Byte uniformity", byte_counts),
                self._uniformity_test("Alphabet index uniformity", index_counts),
                self._monobit_test(data),
            ]

        passed = all(t.passed for t in tests)
        failed = [t.test_name for t in tests if not t.passed]
        assessment = (
            "Source output is consistent with uniform randomness."
            if passed
            else f"Source failed: {', '.join(failed)}. Do not use it for secrets."
        )
        if not passed:
            self.logger.warning("Randomness audit failed", failed_tests=failed)

        return RandomnessAudit(
            sample_size=self.sample_size,
            significance=self.significance,
            shannon_entropy=round(shannon_entropy(byte_counts), 4),
            min_entropy=round(min_entropy(byte_counts), 4),
            tests=tests,
            passed=passed,
            assessment=assessment,
        )

    def _uniformity_test(self, name: str, counts: np.ndarray) -> RandomnessTest:
        chi2, p_value = uniform_chi_squared(counts)
        return RandomnessTest(
            test_name=name,
            statistic=round(chi2, 4),
            p_value=p_value,
            passed=p_value >= self.significance,
            description=(
                f"Pearson chi-squared over {counts.size} bins "
                f"({counts.size - 1} degrees of freedom)."
            ),
        )

    def _monobit_test(self, data: bytes) -> RandomnessTest:
        """NIST SP 800-22 Section 2.1: ``p = erfc(|S_n| / sqrt(2n))``."""
        bits = np.unpackbits(np.frombuffer(data, dtype=np.uint8))
        n = int(bits.size)
        s_n = int(2 * int(bits.sum()) - n)
        s_obs = abs(s_n) / math.sqrt(n)
        p_value = math.erfc(s_obs / math.sqrt(2.0))
        return RandomnessTest(
            test_name="Frequency (Monobit)",
            statistic=round(s_obs, 4),
            p_value=p_value,
            passed=p_value >= self.significance,
            description=f"Proportion of one bits; S_n = {s_n} over {n} bits.",
        )
