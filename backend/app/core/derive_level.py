"""Level Derivation — level and experience-to-next-level from raw experience.

Invariants:
    - Reaching level L requires 50 * L * (L + 1) cumulative experience
    - derive_level(e) is the largest L with 50 * L * (L + 1) <= e
    - derive_until_next_level(e, derive_level(e)) >= 1 for every e >= 0
    - Both functions are PURE and total over e >= 0

Design Decisions:
    - Integer square root instead of float sqrt: floor((isqrt(n) - 50) / 100) equals
      floor((sqrt(n) - 50) / 100) exactly, with no rounding drift near level boundaries
"""

import math


def derive_level(experience: int) -> int:
    """level = floor((sqrt(2500 + 200 * experience) - 50) / 100)."""
    if experience < 0:
        raise ValueError(f"experience must be >= 0, got {experience}")
    return (math.isqrt(2500 + 200 * experience) - 50) // 100


def derive_until_next_level(experience: int, level: int) -> int:
    """Experience still missing to reach level + 1.

    Callers pass the level derived from the same experience value.
    """
    return 50 * (level + 1) * (level + 2) - experience
