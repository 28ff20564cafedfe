"""Monthly cost calculation for selected line items and packages.

All monetary calculations use Decimal arithmetic to avoid floating-point errors.
Costs are quantized to two decimal places with ROUND_HALF_UP rounding.
"""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel

from adpackage.domain.errors import PricingError, UnknownPricingModelError
from adpackage.domain.models import PackageSelection, PublicationSelection, SelectedItem
from adpackage.domain.types import PER_UNIT_MODELS, PricingModel

# Precision: all monetary values quantized to 2 decimal places
TWO_PLACES = Decimal("0.01")

ZERO = Decimal("0")

# Impressions are billed per thousand, views per hundred
IMPRESSIONS_PER_CPM_UNIT = Decimal("1000")
VIEWS_PER_CPV_UNIT = Decimal("100")

# Clicks assumed per impression when no click data exists
DEFAULT_CLICK_THROUGH_RATE = Decimal("0.01")

# ``current_frequency`` for impression models is a share on a 0-100 scale
SHARE_SCALE = Decimal("100")


def _to_decimal(value: float | int | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def impression_share_cost(
    pricing_model: PricingModel,
    unit_price: Decimal,
    impressions: float | int | Decimal,
    share_percent: float | int | Decimal,
    click_through_rate: Decimal = DEFAULT_CLICK_THROUGH_RATE,
) -> Decimal:
    """Cost of buying a share of an item's monthly impressions.

    Formulas, with ``share = share_percent / 100``:

    - cpm: ``unit_price * impressions * share / 1000``
    - cpv: ``unit_price * impressions * share / 100`` (impressions stand in
      for views)
    - cpc: ``unit_price * impressions * share * click_through_rate``

    Args:
        pricing_model: One of cpm, cpv or cpc.
        unit_price: Price per thousand impressions, hundred views, or click.
        impressions: Monthly impressions available for the item.
        share_percent: Purchased share of impressions, 0-100.
        click_through_rate: Clicks per impression assumed for cpc.

    Returns:
        The monthly cost, quantized to 2 decimal places. ``0.00`` when price,
        impressions or share is zero.

    Raises:
        PricingError: If impressions or share_percent is negative.
        UnknownPricingModelError: If *pricing_model* is not cpm, cpv or cpc.
    """
    volume = _to_decimal(impressions)
    share = _to_decimal(share_percent)
    if volume < 0:
        raise PricingError(f"impressions must not be negative, got {impressions}")
    if share < 0:
        raise PricingError(f"share_percent must not be negative, got {share_percent}")

    if not unit_price or not volume or not share:
        return ZERO.quantize(TWO_PLACES)

    purchased = volume * share / SHARE_SCALE

    match pricing_model:
        case PricingModel.CPM:
            cost = unit_price * purchased / IMPRESSIONS_PER_CPM_UNIT
        case PricingModel.CPV:
            cost = unit_price * purchased / VIEWS_PER_CPV_UNIT
        case PricingModel.CPC:
            cost = unit_price * purchased * click_through_rate
        case _:
            raise UnknownPricingModelError(pricing_model)

    return cost.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def monthly_cost(item: SelectedItem) -> Decimal:
    """Calculate one selected item's contribution to monthly spend.

    - flat, monthly: the unit price once, whatever the frequency.
    - per_week, per_day and per-placement models: unit price times
      ``current_frequency``.
    - cpm, cpv, cpc: see :func:`impression_share_cost`, with
      ``current_frequency`` as the purchased percentage of impressions.

    Exclusion is not checked here; callers summing a package skip excluded
    items themselves.

    Args:
        item: The selected line item.

    Returns:
        The monthly cost as a Decimal with exactly 2 decimal places.

    Raises:
        UnknownPricingModelError: If the item's pricing model is not recognised.
    """
    unit_price = item.unit_price or ZERO

    match item.pricing_model:
        case PricingModel.FLAT | PricingModel.MONTHLY:
            cost = unit_price
        case model if model in PER_UNIT_MODELS:
            cost = unit_price * Decimal(item.current_frequency)
        case PricingModel.CPM | PricingModel.CPV | PricingModel.CPC:
            return impression_share_cost(
                item.pricing_model,
                unit_price,
                item.resolve_impressions(),
                item.current_frequency,
            )
        case _:
            raise UnknownPricingModelError(item.pricing_model)

    return cost.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def publication_total(publication: PublicationSelection) -> Decimal:
    """Sum the monthly cost of a publication's non-excluded items.

    Args:
        publication: The publication selection.

    Returns:
        Total monthly cost with exactly 2 decimal places.
    """
    total = sum((monthly_cost(item) for item in publication.active_items()), ZERO)
    return total.quantize(TWO_PLACES)


def package_total(selection: PackageSelection) -> Decimal:
    """Sum the monthly cost of every publication in a package.

    Args:
        selection: The package selection.

    Returns:
        Total monthly cost with exactly 2 decimal places.
    """
    total = sum((publication_total(pub) for pub in selection.publications), ZERO)
    return total.quantize(TWO_PLACES)


class BudgetCheck(BaseModel, frozen=True):
    """Result of checking a package against a monthly budget.

    Attributes:
        valid: Whether the package cost fits within the budget.
        total_cost: Total monthly cost of the package.
        percentage_used: Cost as a percentage of budget (0 for a zero budget).
        overage: Amount over budget, or 0.
    """

    valid: bool
    total_cost: Decimal
    percentage_used: Decimal
    overage: Decimal


def validate_budget(selection: PackageSelection, budget: Decimal) -> BudgetCheck:
    """Check whether a package fits within a monthly budget.

    Args:
        selection: The package selection.
        budget: Monthly budget limit.

    Returns:
        BudgetCheck with fit, spend percentage, and overage.

    Raises:
        PricingError: If budget is negative.
    """
    if budget < 0:
        raise PricingError(f"budget must not be negative, got {budget}")

    total = package_total(selection)
    if budget > 0:
        percentage = (total / budget * SHARE_SCALE).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    else:
        percentage = ZERO.quantize(TWO_PLACES)
    overage = max(ZERO, total - budget).quantize(TWO_PLACES)

    return BudgetCheck(
        valid=total <= budget,
        total_cost=total,
        percentage_used=percentage,
        overage=overage,
    )
