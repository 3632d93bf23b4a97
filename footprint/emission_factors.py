"""
emission_factors.py – Static emission factor table and activity lookup.

All factors are in kg CO₂e per declared unit. The table order matters:
partial-name lookups return the first entry whose name appears in the
activity text, so earlier entries win ties.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class EmissionFactor:
    """One row of the factor table."""
    source_name: str
    unit: str
    factor_value: float

    def to_dict(self) -> dict:
        return {
            "source": self.source_name,
            "unit": self.unit,
            "factor": self.factor_value,
        }


# ─────────────────────────────────────────────────────────────
# Built-in factor table (kg CO₂e / unit)
# ─────────────────────────────────────────────────────────────
DEFAULT_FACTORS: tuple[EmissionFactor, ...] = (
    EmissionFactor("Electricity", "kWh", 0.82),
    EmissionFactor("Diesel", "L", 2.68),
    EmissionFactor("LPG", "kg", 3.00),
    EmissionFactor("Steam", "kg", 1.90),
    EmissionFactor("TextileWaste", "kg", 1.40),
    EmissionFactor("Transport", "km", 0.15),   # example transport factor
)


class FactorRegistry:
    """
    Ordered, read-only collection of emission factors.

    Lookup is case-insensitive and runs in two passes: an exact name match,
    then the first factor (table order) whose name is a substring of the
    activity text, e.g. ``"diesel generator"`` resolves to ``Diesel``.
    """

    def __init__(self, factors: Iterable[EmissionFactor]) -> None:
        self._factors: tuple[EmissionFactor, ...] = tuple(factors)
        self._keys: tuple[str, ...] = tuple(f.source_name.lower() for f in self._factors)

        seen: set[str] = set()
        for factor, key in zip(self._factors, self._keys):
            if factor.factor_value < 0:
                raise ValueError(
                    f"Emission factor for '{factor.source_name}' must be >= 0, "
                    f"got {factor.factor_value}"
                )
            if key in seen:
                raise ValueError(f"Duplicate emission factor source '{factor.source_name}'")
            seen.add(key)

    @property
    def factors(self) -> tuple[EmissionFactor, ...]:
        return self._factors

    def __len__(self) -> int:
        return len(self._factors)

    def __iter__(self):
        return iter(self._factors)

    def lookup(self, activity_text: str | None) -> EmissionFactor | None:
        """Return the factor for *activity_text*, or ``None`` when nothing matches."""
        if not activity_text:
            return None
        key = activity_text.strip().lower()
        if not key:
            return None

        for factor, name in zip(self._factors, self._keys):
            if name == key:
                return factor

        for factor, name in zip(self._factors, self._keys):
            if name in key:
                return factor

        return None


DEFAULT_REGISTRY = FactorRegistry(DEFAULT_FACTORS)


def lookup(activity_text: str | None) -> EmissionFactor | None:
    """Look up *activity_text* in the built-in factor table."""
    return DEFAULT_REGISTRY.lookup(activity_text)
