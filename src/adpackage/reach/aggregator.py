"""Package reach aggregation across publications and channels.

Deduplicates at the publication level before applying the overlap factor:
a publication's channel audience is counted once per channel, at its largest
item-level audience, so five newsletter placements from one outlet do not
count its subscriber base five times.
"""

from decimal import ROUND_HALF_UP, Decimal

import structlog
from pydantic import BaseModel, ConfigDict

from adpackage.domain.models import PackageSelection
from adpackage.domain.types import CalculationMethod, Channel
from adpackage.reach.overlap import DEFAULT_OVERLAP_CONFIG, OverlapConfig, select_overlap_factor

logger = structlog.get_logger()


class ReachSummary(BaseModel):
    """Cost-independent reach estimate for a package.

    Always recomputed from the selection; never stored on its own.

    Attributes:
        total_monthly_impressions: Impressions summed across included items.
        total_monthly_exposures: Frequency-adjusted exposures.
        channel_audiences: Per channel, the sum over publications of each
            publication's largest item audience on that channel.
        estimated_total_reach: Sum of ``channel_audiences``.
        estimated_unique_reach: Total reach after the overlap factor.
        calculation_method: Which data the estimate rests on.
        overlap_factor: The coefficient applied.
        publications_count: Publications in the selection.
        channels_count: Distinct channels across included items.
    """

    model_config = ConfigDict(frozen=True)

    total_monthly_impressions: int = 0
    total_monthly_exposures: int = 0
    channel_audiences: dict[Channel, int]
    estimated_total_reach: int = 0
    estimated_unique_reach: int = 0
    calculation_method: CalculationMethod = CalculationMethod.AUDIENCE
    overlap_factor: float
    publications_count: int = 0
    channels_count: int = 0


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def aggregate_reach(
    selection: PackageSelection,
    overlap_config: OverlapConfig = DEFAULT_OVERLAP_CONFIG,
) -> ReachSummary:
    """Estimate total and unique reach for a package selection.

    For each publication, walks its non-excluded items once: impressions add
    up; exposures add an item's impressions when it has any, otherwise its
    audience times ``current_frequency``; per channel the largest item audience
    is kept. Channel maxima are then summed across publications and the
    composition-dependent overlap factor is applied.

    Args:
        selection: The publications and items in the package.
        overlap_config: Overlap coefficients.

    Returns:
        A new ReachSummary. An empty selection yields all zeros.
    """
    total_impressions = 0.0
    total_exposures = 0.0
    channel_totals: dict[Channel, float] = {}

    for publication in selection.publications:
        channel_max: dict[Channel, float] = {}

        for item in publication.active_items():
            channel_max.setdefault(item.channel, 0)

            impressions = item.resolve_impressions()
            audience = item.resolve_audience()

            if impressions:
                total_impressions += impressions
                total_exposures += impressions
            elif audience:
                # e.g. 15K subscribers x 8 sends = 120K exposures
                total_exposures += audience * item.current_frequency

            if audience:
                channel_max[item.channel] = max(channel_max[item.channel], audience)

        for channel, audience in channel_max.items():
            if audience:
                channel_totals[channel] = channel_totals.get(channel, 0) + audience
            else:
                channel_totals.setdefault(channel, 0)

    channel_audiences = {
        channel: round_half_up(total) for channel, total in channel_totals.items() if total
    }
    total_reach = sum(channel_totals.values())

    overlap_factor = select_overlap_factor(
        selection.publications, len(channel_totals), overlap_config
    )

    if total_impressions > 0 and total_reach > 0:
        method = CalculationMethod.MIXED
    elif total_impressions > 0:
        method = CalculationMethod.IMPRESSIONS
    else:
        method = CalculationMethod.AUDIENCE

    summary = ReachSummary(
        total_monthly_impressions=round_half_up(total_impressions),
        total_monthly_exposures=round_half_up(total_exposures),
        channel_audiences=channel_audiences,
        estimated_total_reach=round_half_up(total_reach),
        estimated_unique_reach=round_half_up(total_reach * overlap_factor),
        calculation_method=method,
        overlap_factor=overlap_factor,
        publications_count=len(selection.publications),
        channels_count=len(channel_totals),
    )
    logger.debug(
        "reach_aggregated",
        publications=summary.publications_count,
        channels=summary.channels_count,
        unique_reach=summary.estimated_unique_reach,
        method=summary.calculation_method,
    )
    return summary
