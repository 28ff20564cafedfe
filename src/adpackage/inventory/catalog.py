"""Line item extraction from publication inventory documents.

Bridges the raw, camelCase publication documents held by the inventory store
to typed ``AdvertisingLineItem`` / ``SelectedItem`` models. Documents are
synchronized first so each item carries fresh performance metrics.

Pricing on an advertising opportunity may be a single ``pricing`` dict or a
list of commitment tiers (``1x``, ``4x``, ``12x`` ...). The base 1x tier is
used as the unit price: tiers are volume discounts and the per-insertion rate
is the reference price.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog

from adpackage.domain.models import (
    AdvertisingLineItem,
    AudienceMetrics,
    PerformanceMetrics,
    PublicationSelection,
    SelectedItem,
)
from adpackage.domain.types import IMPRESSION_MODELS, Channel, PricingModel, parse_pricing_model
from adpackage.metrics.sync import CHANNEL_DOCUMENT_KEYS, Cadences, sync_publication

logger = structlog.get_logger()

_COMMITMENT_PATTERN = re.compile(r"^(\d+)x$")

# Default share of impressions bought for cpm/cpv/cpc items
FULL_IMPRESSION_SHARE = 100


def parse_commitment_multiplier(frequency: str | None) -> int:
    """Parse a commitment tier such as ``"12x"`` into its multiplier.

    Args:
        frequency: The tier label.

    Returns:
        The multiplier, or 1 for anything that is not ``<digits>x``.
    """
    if not frequency or not isinstance(frequency, str):
        return 1
    match = _COMMITMENT_PATTERN.match(frequency.strip().lower())
    return int(match.group(1)) if match else 1


def _unwrap(tier: Any) -> dict[str, Any]:
    if not isinstance(tier, Mapping):
        return {}
    nested = tier.get("pricing")
    if isinstance(nested, Mapping):
        return dict(nested)
    return dict(tier)


def select_base_pricing(pricing: Any) -> dict[str, Any]:
    """Pick the base pricing record from an opportunity's pricing value.

    For a tier list: the ``1x`` or one-time tier, else the tier with the
    lowest commitment multiplier, else the first entry. Tiers may be nested
    as ``{"pricing": {...}}``.

    Args:
        pricing: A pricing dict, a list of tiers, or None.

    Returns:
        A pricing dict (empty when there is no pricing).
    """
    if not pricing:
        return {}
    if isinstance(pricing, Mapping):
        return dict(pricing)
    if not isinstance(pricing, list):
        return {}

    tiers = [_unwrap(tier) for tier in pricing]
    tiers = [tier for tier in tiers if tier]
    if not tiers:
        return {}

    for tier in tiers:
        label = str(tier.get("frequency") or "").strip().lower()
        if label == "1x" or "one time" in label or label == "onetime":
            return tier

    # sorted() is stable, so the first tier wins a tie
    return sorted(tiers, key=lambda tier: parse_commitment_multiplier(tier.get("frequency")))[0]


def _to_price(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        logger.warning("unit_price_unparseable", value=value)
        return Decimal("0")


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value


def _whole(value: Any) -> int | None:
    number = _number(value)
    return int(number) if number else None


def _audience_metrics(channel: Channel, entry: Mapping[str, Any]) -> AudienceMetrics:
    """Collect the channel-level audience numbers an entry exposes."""
    nested = entry.get("metrics") if isinstance(entry.get("metrics"), Mapping) else {}
    match channel:
        case Channel.PRINT:
            return AudienceMetrics(circulation=_number(entry.get("circulation")))
        case Channel.NEWSLETTER:
            return AudienceMetrics(subscribers=_number(entry.get("subscribers")))
        case Channel.PODCAST:
            return AudienceMetrics(
                listeners=_number(entry.get("averageListeners"))
                or _number(entry.get("averageDownloads"))
            )
        case Channel.RADIO:
            return AudienceMetrics(listeners=_number(entry.get("listeners")))
        case Channel.STREAMING:
            return AudienceMetrics(
                subscribers=_number(entry.get("subscribers"))
                or _number(entry.get("averageViews"))
            )
        case Channel.SOCIAL:
            return AudienceMetrics(
                followers=_number(nested.get("followers")) or _number(entry.get("followers"))
            )
        case Channel.WEBSITE:
            return AudienceMetrics(
                monthly_visitors=_number(nested.get("monthlyVisitors"))
                or _number(entry.get("monthlyVisitors")),
                monthly_page_views=_number(nested.get("monthlyPageViews"))
                or _number(entry.get("monthlyPageViews")),
            )
        case Channel.EVENTS:
            return AudienceMetrics(
                average_attendance=_number(entry.get("averageAttendance")),
                expected_attendees=_number(entry.get("expectedAttendees")),
            )


def _entries(data: Any, path: str) -> Iterator[tuple[str, Mapping[str, Any]]]:
    if isinstance(data, list):
        for index, entry in enumerate(data):
            if isinstance(entry, Mapping):
                yield f"{path}[{index}]", entry
    elif isinstance(data, Mapping):
        yield path, data


def _line_item(
    channel: Channel,
    ad: Mapping[str, Any],
    item_path: str,
    audience: AudienceMetrics,
    days_per_week: float | None = None,
) -> AdvertisingLineItem:
    pricing = select_base_pricing(ad.get("pricing"))
    raw_model = pricing.get("pricingModel")
    metrics = ad.get("performanceMetrics")
    return AdvertisingLineItem(
        channel=channel,
        item_name=str(ad.get("name") or ad.get("adFormat") or "Unnamed placement"),
        item_path=item_path,
        pricing_model=parse_pricing_model(raw_model) if raw_model else PricingModel.FLAT,
        unit_price=_to_price(pricing.get("flatRate")),
        spots_per_show=_whole(ad.get("spotsPerShow")),
        days_per_week=days_per_week,
        performance_metrics=(
            PerformanceMetrics.from_document(metrics) if isinstance(metrics, Mapping) else None
        ),
        audience_metrics=audience,
        monthly_impressions=_number(ad.get("monthlyImpressions")),
    )


def _opportunities(entry: Mapping[str, Any], path: str) -> Iterator[tuple[str, Mapping[str, Any]]]:
    ads = entry.get("advertisingOpportunities")
    if isinstance(ads, list):
        for index, ad in enumerate(ads):
            if isinstance(ad, Mapping):
                yield f"{path}.advertisingOpportunities[{index}]", ad


def _walk(
    document: Mapping[str, Any],
) -> Iterator[tuple[AdvertisingLineItem, Mapping[str, Any]]]:
    """Yield each line item alongside the raw opportunity it came from."""
    channels = document.get("distributionChannels")
    if not isinstance(channels, Mapping):
        return

    for channel, key in CHANNEL_DOCUMENT_KEYS.items():
        for path, entry in _entries(channels.get(key), f"distributionChannels.{key}"):
            audience = _audience_metrics(channel, entry)
            for ad_path, ad in _opportunities(entry, path):
                yield _line_item(channel, ad, ad_path, audience), ad

            if channel != Channel.RADIO or not isinstance(entry.get("shows"), list):
                continue
            for show_index, show in enumerate(entry["shows"]):
                if not isinstance(show, Mapping):
                    continue
                show_audience = AudienceMetrics(
                    listeners=_number(show.get("averageListeners")) or audience.listeners
                )
                for ad_path, ad in _opportunities(show, f"{path}.shows[{show_index}]"):
                    item = _line_item(
                        channel,
                        ad,
                        ad_path,
                        show_audience,
                        days_per_week=_number(show.get("daysPerWeek")),
                    )
                    yield item, ad


def extract_line_items(document: Mapping[str, Any]) -> list[AdvertisingLineItem]:
    """Build typed line items from a publication document.

    Items appear in channel order, then document order. ``item_path`` locates
    each item in the source document, e.g.
    ``distributionChannels.radioStations[0].shows[1].advertisingOpportunities[0]``.

    Args:
        document: A publication document, ideally already synchronized.

    Returns:
        The publication's advertising line items.

    Raises:
        UnknownPricingModelError: If an opportunity declares a pricing model
            outside the pricing vocabulary.
    """
    return [item for item, _ in _walk(document)]


def select_item(
    item: AdvertisingLineItem,
    current_frequency: int | None = None,
    is_excluded: bool = False,
) -> SelectedItem:
    """Select a line item into a package.

    Args:
        item: The line item.
        current_frequency: Purchase frequency; defaults to 100 (a full share)
            for impression models and 1 otherwise.
        is_excluded: Whether the item starts excluded.

    Returns:
        The selected item.
    """
    if current_frequency is None:
        current_frequency = FULL_IMPRESSION_SHARE if item.pricing_model in IMPRESSION_MODELS else 1
    return SelectedItem(
        **item.model_dump(),
        current_frequency=current_frequency,
        is_excluded=is_excluded,
    )


def _default_frequency(item: AdvertisingLineItem, ad: Mapping[str, Any]) -> int:
    if item.pricing_model in IMPRESSION_MODELS:
        return FULL_IMPRESSION_SHARE
    return parse_commitment_multiplier(select_base_pricing(ad.get("pricing")).get("frequency"))


def build_publication_selection(
    document: Mapping[str, Any],
    cadences: Cadences = None,
) -> PublicationSelection:
    """Synchronize a publication document and select all of its line items.

    Each item's starting frequency is the commitment multiplier of its base
    pricing tier (``"4x"`` selects four), or a full impression share for
    cpm/cpv/cpc items.

    Args:
        document: The raw publication document.
        cadences: Optional cadence table overriding the defaults.

    Returns:
        A PublicationSelection with every item included.
    """
    synced = sync_publication(document, cadences)
    basic_info = synced.get("basicInfo")
    if not isinstance(basic_info, Mapping):
        basic_info = {}

    selected = [select_item(item, _default_frequency(item, ad)) for item, ad in _walk(synced)]
    publication_id = synced.get("publicationId", synced.get("_id", ""))
    logger.info(
        "publication_selection_built",
        publication_id=publication_id,
        items=len(selected),
    )
    return PublicationSelection(
        publication_id=publication_id,
        publication_name=str(
            basic_info.get("publicationName") or synced.get("publicationName") or ""
        ),
        geography=basic_info.get("primaryServiceArea") or None,
        items=selected,
    )
