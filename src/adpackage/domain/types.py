"""Domain enumerations and tag parsing for the package pricing engine."""

from enum import StrEnum

from adpackage.domain.errors import UnknownChannelError, UnknownPricingModelError


class Channel(StrEnum):
    """Advertising channel types carried by a publication."""

    WEBSITE = "website"
    PRINT = "print"
    NEWSLETTER = "newsletter"
    SOCIAL = "social"
    PODCAST = "podcast"
    RADIO = "radio"
    STREAMING = "streaming"
    EVENTS = "events"


class PricingModel(StrEnum):
    """Billing conventions for a single line item."""

    # Time-based
    FLAT = "flat"
    MONTHLY = "monthly"
    PER_WEEK = "per_week"
    PER_DAY = "per_day"
    # Occurrence-based
    PER_SPOT = "per_spot"
    PER_AD = "per_ad"
    PER_SEND = "per_send"
    PER_POST = "per_post"
    PER_STORY = "per_story"
    PER_EPISODE = "per_episode"
    # Impression-based
    CPM = "cpm"
    CPV = "cpv"
    CPC = "cpc"


class CalculationMethod(StrEnum):
    """Which data a reach summary was derived from."""

    IMPRESSIONS = "impressions"
    AUDIENCE = "audience"
    MIXED = "mixed"


# Models whose cost scales with the purchased frequency
PER_UNIT_MODELS: frozenset[PricingModel] = frozenset(
    {
        PricingModel.PER_WEEK,
        PricingModel.PER_DAY,
        PricingModel.PER_SPOT,
        PricingModel.PER_AD,
        PricingModel.PER_SEND,
        PricingModel.PER_POST,
        PricingModel.PER_STORY,
        PricingModel.PER_EPISODE,
    }
)

# Models billed against a share of the available impressions
IMPRESSION_MODELS: frozenset[PricingModel] = frozenset(
    {PricingModel.CPM, PricingModel.CPV, PricingModel.CPC}
)

# Legacy tags still found in stored inventory documents
CHANNEL_ALIASES: dict[str, Channel] = {
    "email": Channel.NEWSLETTER,
}

PRICING_MODEL_ALIASES: dict[str, PricingModel] = {
    "per_month": PricingModel.MONTHLY,
    "weekly": PricingModel.PER_WEEK,
}


def parse_channel(value: str) -> Channel:
    """Resolve a raw channel tag, including legacy aliases.

    Args:
        value: The channel tag as stored upstream (case-insensitive).

    Returns:
        The matching Channel member.

    Raises:
        UnknownChannelError: If the tag is outside the channel vocabulary.
    """
    if isinstance(value, Channel):
        return value
    key = str(value).strip().lower()
    if key in CHANNEL_ALIASES:
        return CHANNEL_ALIASES[key]
    try:
        return Channel(key)
    except ValueError:
        raise UnknownChannelError(value) from None


def parse_pricing_model(value: str) -> PricingModel:
    """Resolve a raw pricing model tag, including legacy aliases.

    Args:
        value: The pricing model tag as stored upstream (case-insensitive).

    Returns:
        The matching PricingModel member.

    Raises:
        UnknownPricingModelError: If the tag is outside the pricing vocabulary.
    """
    if isinstance(value, PricingModel):
        return value
    key = str(value).strip().lower()
    if key in PRICING_MODEL_ALIASES:
        return PRICING_MODEL_ALIASES[key]
    try:
        return PricingModel(key)
    except ValueError:
        raise UnknownPricingModelError(value) from None
