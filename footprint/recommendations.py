"""
recommendations.py – Rule-based improvement suggestions.

Rules are evaluated independently and their messages appended in a fixed
order:

1. Magnitude tier   – exactly one of severe / high / moderate / low, chosen
                      from the grand total (highest matching threshold wins).
2. Top contributor  – names the largest category and its rounded emission.
3. Keyword follow-ups on the top category's name (any number may fire):
      "electric"          → electricity measures
      "diesel" / "fuel"   → fuel / boiler measures
      "waste"             → waste measures

With no categories only the magnitude message is produced.
"""
from __future__ import annotations

import logging

from footprint.calculations import CategoryAggregate, rank_categories, round_half_up
from footprint.constants import (
    ELECTRICITY_KEYWORDS,
    FUEL_KEYWORDS,
    HIGH_EMISSIONS_THRESHOLD,
    MODERATE_EMISSIONS_THRESHOLD,
    MSG_ELECTRICITY,
    MSG_FUEL,
    MSG_HIGH,
    MSG_LOW,
    MSG_MODERATE,
    MSG_SEVERE,
    MSG_TOP_CONTRIBUTOR,
    MSG_WASTE,
    SEVERE_EMISSIONS_THRESHOLD,
    WASTE_KEYWORDS,
)

logger = logging.getLogger(__name__)

_FOLLOW_UPS: tuple[tuple[tuple[str, ...], str], ...] = (
    (ELECTRICITY_KEYWORDS, MSG_ELECTRICITY),
    (FUEL_KEYWORDS, MSG_FUEL),
    (WASTE_KEYWORDS, MSG_WASTE),
)


def magnitude_message(total_emission: float) -> str:
    """Return the single tier message for *total_emission* (kg CO₂e)."""
    if total_emission > SEVERE_EMISSIONS_THRESHOLD:
        return MSG_SEVERE
    if total_emission > HIGH_EMISSIONS_THRESHOLD:
        return MSG_HIGH
    if total_emission > MODERATE_EMISSIONS_THRESHOLD:
        return MSG_MODERATE
    return MSG_LOW


def follow_up_messages(category_name: str) -> list[str]:
    name = category_name.lower()
    return [
        message
        for keywords, message in _FOLLOW_UPS
        if any(kw in name for kw in keywords)
    ]


def suggest(
    total_emission: float,
    aggregates: dict[str, CategoryAggregate],
) -> list[str]:
    """
    Build the ordered suggestion list for a report.

    Always returns at least one message.
    """
    suggestions = [magnitude_message(total_emission)]

    ranked = rank_categories(aggregates)
    if not ranked:
        return suggestions

    top, info = ranked[0]
    suggestions.append(
        MSG_TOP_CONTRIBUTOR.format(name=top, emission=int(round_half_up(info.emission)))
    )
    suggestions.extend(follow_up_messages(top))

    logger.debug("Built %d suggestions (top contributor '%s')", len(suggestions), top)
    return suggestions
