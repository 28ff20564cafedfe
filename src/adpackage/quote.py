"""Package quote: per-item monthly costs, totals, and reach in one result.

This is the recomputation a package builder runs after every selection
toggle. Excluded items are still listed, at zero cost, so a UI can show them.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from adpackage.domain.models import PackageSelection
from adpackage.domain.types import Channel, PricingModel
from adpackage.pricing.engine import TWO_PLACES, ZERO, monthly_cost
from adpackage.reach.aggregator import ReachSummary, aggregate_reach
from adpackage.reach.overlap import DEFAULT_OVERLAP_CONFIG, OverlapConfig


class ItemCost(BaseModel):
    """Monthly cost of one selected item."""

    model_config = ConfigDict(frozen=True)

    item_path: str
    item_name: str
    channel: Channel
    pricing_model: PricingModel
    current_frequency: int
    is_excluded: bool
    monthly_cost: Decimal


class PublicationQuote(BaseModel):
    """Item costs and total for one publication."""

    model_config = ConfigDict(frozen=True)

    publication_id: int | str
    publication_name: str
    items: list[ItemCost]
    total: Decimal


class PackageQuote(BaseModel):
    """Cost and reach for a whole package selection."""

    model_config = ConfigDict(frozen=True)

    publications: list[PublicationQuote]
    total_monthly_cost: Decimal
    reach: ReachSummary


def quote_package(
    selection: PackageSelection,
    overlap_config: OverlapConfig = DEFAULT_OVERLAP_CONFIG,
) -> PackageQuote:
    """Price every item and estimate reach for a package selection.

    Args:
        selection: The package selection.
        overlap_config: Overlap coefficients for the reach estimate.

    Returns:
        A PackageQuote. Totals skip excluded items.

    Raises:
        UnknownPricingModelError: If an item has an unrecognised pricing model.
    """
    publications: list[PublicationQuote] = []
    grand_total = ZERO

    for publication in selection.publications:
        items: list[ItemCost] = []
        total = ZERO
        for item in publication.items:
            cost = ZERO.quantize(TWO_PLACES) if item.is_excluded else monthly_cost(item)
            total += cost
            items.append(
                ItemCost(
                    item_path=item.item_path,
                    item_name=item.item_name,
                    channel=item.channel,
                    pricing_model=item.pricing_model,
                    current_frequency=item.current_frequency,
                    is_excluded=item.is_excluded,
                    monthly_cost=cost,
                )
            )
        total = total.quantize(TWO_PLACES)
        grand_total += total
        publications.append(
            PublicationQuote(
                publication_id=publication.publication_id,
                publication_name=publication.publication_name,
                items=items,
                total=total,
            )
        )

    return PackageQuote(
        publications=publications,
        total_monthly_cost=grand_total.quantize(TWO_PLACES),
        reach=aggregate_reach(selection, overlap_config),
    )
