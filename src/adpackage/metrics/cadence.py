"""Cadence normalization: publication frequency strings to occurrences per month.

The table below is the single source of truth for how often a channel
publishes. Rates are expressed per calendar month (30.44-day basis, with
4.33 weeks per month). Unknown or missing cadences resolve to one occurrence
per month.
"""

from collections.abc import Mapping

import structlog

logger = structlog.get_logger()

WEEKS_PER_MONTH = 4.33

# Default occurrence rate for missing or unrecognised cadences
DEFAULT_OCCURRENCES_PER_MONTH = 1.0

CADENCE_TO_MONTHLY: dict[str, float] = {
    "daily": 30,
    "daily-business": 22,
    "weekdays": 22,
    "weekly": WEEKS_PER_MONTH,
    "bi-weekly": 2.17,
    "monthly": 1,
    "quarterly": 0.33,
    "annual": 0.083,
    "bi-annually": 0.167,
    "irregular": 2,
    # Radio broadcast schedules
    "weekdays-plus-saturday": 26 / WEEKS_PER_MONTH,
    "weekdays-plus-sunday": 26 / WEEKS_PER_MONTH,
    "weekend-only": 8 / WEEKS_PER_MONTH,
    "saturdays": 4 / WEEKS_PER_MONTH,
    "sundays": 4 / WEEKS_PER_MONTH,
}


def occurrences_per_month(
    cadence: str | None,
    table: Mapping[str, float] | None = None,
) -> float:
    """Convert a cadence descriptor to occurrences per month.

    Lookup is case-insensitive and ignores surrounding whitespace. Never raises.

    Args:
        cadence: A cadence string such as ``"weekly"`` or ``"Daily-Business"``.
        table: Optional cadence table; defaults to ``CADENCE_TO_MONTHLY``.

    Returns:
        The occurrence rate, or ``DEFAULT_OCCURRENCES_PER_MONTH`` when the
        cadence is missing or not in the table.
    """
    if not cadence or not isinstance(cadence, str):
        return DEFAULT_OCCURRENCES_PER_MONTH

    rates = CADENCE_TO_MONTHLY if table is None else table
    rate = rates.get(cadence.strip().lower())
    if not rate:
        logger.debug("cadence_unrecognized", cadence=cadence)
        return DEFAULT_OCCURRENCES_PER_MONTH
    return float(rate)


def merge_cadence_table(overrides: Mapping[str, float] | None) -> dict[str, float]:
    """Return the default cadence table with overrides applied on top.

    Override keys are lower-cased so lookups stay case-insensitive.

    Args:
        overrides: Extra or replacement cadence rates.

    Returns:
        A new cadence table.
    """
    table = dict(CADENCE_TO_MONTHLY)
    for cadence, rate in (overrides or {}).items():
        table[cadence.strip().lower()] = float(rate)
    return table
