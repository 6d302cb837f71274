"""Scoring configuration for the Pack Health engine.

The reference values are module constants in types.py; this object bundles
them so alternate category sets and weights can be scored side by side
without mutating globals.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from proofpack.core.pack_health.factors.completeness import (
    VolumeDivisor,
    distinct_categories_divisor,
)
from proofpack.core.pack_health.types import (
    ELIGIBILITY_THRESHOLD,
    EXPIRING_WINDOW_DAYS,
    FACTOR_WEIGHTS,
    REQUIRED_CATEGORIES,
)

FACTORS = ("completeness", "expiration", "quality", "remediation")


@dataclass(frozen=True)
class PackHealthConfig:
    """Scoring semantics: categories, weights, thresholds and strategies."""

    required_categories: tuple[str, ...] = REQUIRED_CATEGORIES
    # Excluded from hashing; stored read-only after validation
    weights: Mapping[str, float] = field(default_factory=lambda: dict(FACTOR_WEIGHTS), hash=False)
    eligibility_threshold: int = ELIGIBILITY_THRESHOLD
    expiring_window_days: int = EXPIRING_WINDOW_DAYS
    volume_divisor: VolumeDivisor = distinct_categories_divisor

    def __post_init__(self) -> None:
        categories = tuple(self.required_categories)
        if not categories:
            raise ValueError("required_categories must not be empty")
        if len(set(categories)) != len(categories):
            raise ValueError("required_categories must be unique")
        object.__setattr__(self, "required_categories", categories)

        if set(self.weights) != set(FACTORS):
            raise ValueError(f"weights must define exactly {', '.join(FACTORS)}")
        if any(w < 0 for w in self.weights.values()):
            raise ValueError("weights must be non-negative")
        total = sum(self.weights.values())
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"weights must sum to 1.0 (got {total})")
        object.__setattr__(self, "weights", MappingProxyType(dict(self.weights)))

        if not 0 <= self.eligibility_threshold <= 100:
            raise ValueError("eligibility_threshold must be within 0-100")
        if self.expiring_window_days < 0:
            raise ValueError("expiring_window_days must be non-negative")


DEFAULT_CONFIG = PackHealthConfig()
