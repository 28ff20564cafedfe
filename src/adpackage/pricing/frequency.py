"""Purchase frequency planning for package line items.

Enforces physical publication limits on how often an item can be bought in a
month:

- Daily papers: up to 30x/month (standard is 12x)
- Weekly papers: max 4x/month (once per issue)
- Bi-weekly: max 2x/month
- Monthly: only 1x/month

Strategies only touch per-unit items (per_week, per_day, per_spot, ...).
Flat and monthly items ignore frequency, and cpm/cpv/cpc items use it as an
impression share, so both keep their current value.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum

from adpackage.domain.errors import PricingError
from adpackage.domain.models import SelectedItem
from adpackage.domain.types import PER_UNIT_MODELS
from adpackage.pricing.engine import ZERO, monthly_cost


class PublicationFrequencyType(StrEnum):
    """How often a publication issues, for frequency limits."""

    DAILY = "daily"
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    CUSTOM = "custom"


class FrequencyStrategy(StrEnum):
    """Bulk frequency adjustment strategies."""

    STANDARD = "standard"
    REDUCED = "reduced"
    MINIMUM = "minimum"
    CUSTOM = "custom"


MAX_FREQUENCIES: dict[PublicationFrequencyType, int] = {
    PublicationFrequencyType.DAILY: 30,
    PublicationFrequencyType.WEEKLY: 4,
    PublicationFrequencyType.BI_WEEKLY: 2,
    PublicationFrequencyType.MONTHLY: 1,
    PublicationFrequencyType.CUSTOM: 30,
}

STANDARD_FREQUENCIES: dict[PublicationFrequencyType, int] = {
    PublicationFrequencyType.DAILY: 12,
    PublicationFrequencyType.WEEKLY: 4,
    PublicationFrequencyType.BI_WEEKLY: 2,
    PublicationFrequencyType.MONTHLY: 1,
    PublicationFrequencyType.CUSTOM: 12,
}

_DAILY_OPTIONS = (1, 2, 3, 4, 6, 8, 10, 12, 15, 20, 24, 30)

FREQUENCY_OPTIONS: dict[PublicationFrequencyType, tuple[int, ...]] = {
    PublicationFrequencyType.DAILY: _DAILY_OPTIONS,
    PublicationFrequencyType.WEEKLY: (1, 2, 3, 4),
    PublicationFrequencyType.BI_WEEKLY: (1, 2),
    PublicationFrequencyType.MONTHLY: (1,),
    PublicationFrequencyType.CUSTOM: _DAILY_OPTIONS,
}


def detect_publication_frequency_type(
    frequency: str | None,
    schedule: str | None = None,
) -> PublicationFrequencyType:
    """Classify a publication's cadence string for frequency limits.

    Args:
        frequency: The publication frequency (e.g. ``"weekly"``).
        schedule: Fallback publication schedule text.

    Returns:
        The matching PublicationFrequencyType, ``CUSTOM`` when unclear.
    """
    text = (frequency or schedule or "").lower()
    if not text:
        return PublicationFrequencyType.CUSTOM

    if "daily" in text:
        return PublicationFrequencyType.DAILY
    if "weekly" in text and "bi" not in text:
        return PublicationFrequencyType.WEEKLY
    if "bi-weekly" in text or "biweekly" in text:
        return PublicationFrequencyType.BI_WEEKLY
    if "monthly" in text:
        return PublicationFrequencyType.MONTHLY
    return PublicationFrequencyType.CUSTOM


def valid_frequencies(publication_type: PublicationFrequencyType) -> tuple[int, ...]:
    """Return the purchasable frequencies for a publication type."""
    return FREQUENCY_OPTIONS[publication_type]


def max_frequency(publication_type: PublicationFrequencyType) -> int:
    """Return the most placements a month a publication type allows."""
    return MAX_FREQUENCIES[publication_type]


def standard_frequency(publication_type: PublicationFrequencyType) -> int:
    """Return the default starting frequency for a publication type."""
    return STANDARD_FREQUENCIES[publication_type]


def is_valid_frequency(frequency: int, publication_type: PublicationFrequencyType) -> bool:
    """Check a frequency against the limits and options of a publication type."""
    return (
        0 < frequency <= max_frequency(publication_type)
        and frequency in valid_frequencies(publication_type)
    )


def closest_valid_frequency(target: int, publication_type: PublicationFrequencyType) -> int:
    """Snap a target frequency to the nearest valid option.

    Ties resolve to the lower option.
    """
    options = valid_frequencies(publication_type)
    if target in options:
        return target
    return min(options, key=lambda option: (abs(target - option), option))


def apply_frequency_strategy(
    current: int,
    publication_type: PublicationFrequencyType,
    strategy: FrequencyStrategy,
) -> int:
    """Compute the frequency a bulk strategy assigns to one item.

    - standard: the publication type's standard frequency
    - reduced: half the current frequency (at least 1), snapped to a valid option
    - minimum: 1
    - custom: keep the current frequency if valid, else the standard one

    Args:
        current: The item's current frequency.
        publication_type: The publication's frequency type.
        strategy: The adjustment strategy.

    Returns:
        The new frequency.
    """
    match strategy:
        case FrequencyStrategy.STANDARD:
            return standard_frequency(publication_type)
        case FrequencyStrategy.REDUCED:
            return closest_valid_frequency(max(1, current // 2), publication_type)
        case FrequencyStrategy.MINIMUM:
            return 1
        case _:
            if is_valid_frequency(current, publication_type):
                return current
            return standard_frequency(publication_type)


def with_frequency(item: SelectedItem, new_frequency: int) -> SelectedItem:
    """Return a copy of *item* with a new purchase frequency.

    Raises:
        PricingError: If new_frequency is negative.
    """
    if new_frequency < 0:
        raise PricingError(f"frequency must not be negative, got {new_frequency}")
    return item.model_copy(update={"current_frequency": new_frequency})


def toggle_exclusion(item: SelectedItem) -> SelectedItem:
    """Return a copy of *item* with its exclusion flag flipped."""
    return item.model_copy(update={"is_excluded": not item.is_excluded})


@dataclass(frozen=True)
class FrequencyChange:
    """One item whose frequency a bulk adjustment would change."""

    item_path: str
    item_name: str
    from_frequency: int
    to_frequency: int
    from_cost: Decimal
    to_cost: Decimal


@dataclass(frozen=True)
class BulkAdjustmentPreview:
    """Before/after costs of applying a bulk frequency strategy.

    Attributes:
        before_cost: Monthly cost of the included items as they stand.
        after_cost: Monthly cost after the strategy is applied.
        savings: ``before_cost - after_cost`` (negative when cost rises).
        changes: Items whose frequency would change.
    """

    before_cost: Decimal
    after_cost: Decimal
    savings: Decimal
    changes: list[FrequencyChange] = field(default_factory=list)


def preview_bulk_adjustment(
    entries: Iterable[tuple[SelectedItem, PublicationFrequencyType]],
    strategy: FrequencyStrategy,
) -> BulkAdjustmentPreview:
    """Preview the cost impact of a bulk frequency strategy.

    Excluded items are skipped since they add nothing to the package cost.

    Args:
        entries: Pairs of selected item and its publication's frequency type.
        strategy: The strategy to preview.

    Returns:
        BulkAdjustmentPreview with totals and per-item changes.
    """
    before = ZERO
    after = ZERO
    changes: list[FrequencyChange] = []

    for item, publication_type in entries:
        if item.is_excluded:
            continue

        from_cost = monthly_cost(item)
        if item.pricing_model in PER_UNIT_MODELS:
            adjusted = with_frequency(
                item,
                apply_frequency_strategy(item.current_frequency, publication_type, strategy),
            )
        else:
            adjusted = item
        to_cost = monthly_cost(adjusted)

        before += from_cost
        after += to_cost

        if adjusted.current_frequency != item.current_frequency:
            changes.append(
                FrequencyChange(
                    item_path=item.item_path,
                    item_name=item.item_name,
                    from_frequency=item.current_frequency,
                    to_frequency=adjusted.current_frequency,
                    from_cost=from_cost,
                    to_cost=to_cost,
                )
            )

    return BulkAdjustmentPreview(
        before_cost=before,
        after_cost=after,
        savings=before - after,
        changes=changes,
    )
