"""Domain types, models, and errors for the package pricing engine."""

from adpackage.domain.errors import (
    PackageEngineError,
    PricingError,
    UnknownChannelError,
    UnknownPricingModelError,
)
from adpackage.domain.models import (
    AdvertisingLineItem,
    AudienceMetrics,
    PackageSelection,
    PerformanceMetrics,
    PublicationSelection,
    SelectedItem,
)
from adpackage.domain.types import (
    IMPRESSION_MODELS,
    PER_UNIT_MODELS,
    CalculationMethod,
    Channel,
    PricingModel,
    parse_channel,
    parse_pricing_model,
)

__all__ = [
    "IMPRESSION_MODELS",
    "PER_UNIT_MODELS",
    "AdvertisingLineItem",
    "AudienceMetrics",
    "CalculationMethod",
    "Channel",
    "PackageEngineError",
    "PackageSelection",
    "PerformanceMetrics",
    "PricingError",
    "PricingModel",
    "PublicationSelection",
    "SelectedItem",
    "UnknownChannelError",
    "UnknownPricingModelError",
    "parse_channel",
    "parse_pricing_model",
]
