"""Pydantic v2 models for inventory line items and package selections."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from adpackage.domain.types import Channel, PricingModel, parse_channel, parse_pricing_model


class PerformanceMetrics(BaseModel):
    """Derived audience metrics attached to one advertising line item.

    ``impressions_per_month`` is always ``audience_size * occurrences_per_month``;
    use :meth:`from_source` rather than setting it by hand.
    """

    model_config = ConfigDict(frozen=True)

    audience_size: float = Field(default=0, ge=0)
    occurrences_per_month: float = Field(default=0, ge=0)
    impressions_per_month: float = Field(default=0, ge=0)
    guaranteed: bool = True

    @classmethod
    def from_source(
        cls,
        audience_size: float,
        occurrences_per_month: float,
        guaranteed: bool = True,
    ) -> "PerformanceMetrics":
        """Build metrics from a channel's source audience and occurrence rate."""
        return cls(
            audience_size=audience_size,
            occurrences_per_month=occurrences_per_month,
            impressions_per_month=audience_size * occurrences_per_month,
            guaranteed=guaranteed,
        )

    @classmethod
    def from_document(cls, raw: Mapping[str, Any]) -> "PerformanceMetrics":
        """Read a camelCase ``performanceMetrics`` record from an inventory document."""
        guaranteed = raw.get("guaranteed")
        return cls(
            audience_size=raw.get("audienceSize") or 0,
            occurrences_per_month=raw.get("occurrencesPerMonth") or 0,
            impressions_per_month=raw.get("impressionsPerMonth") or 0,
            guaranteed=True if guaranteed is None else bool(guaranteed),
        )


class AudienceMetrics(BaseModel):
    """Channel-level audience numbers used when an item has no derived metrics."""

    model_config = ConfigDict(frozen=True)

    circulation: float | None = None
    subscribers: float | None = None
    listeners: float | None = None
    followers: float | None = None
    monthly_visitors: float | None = None
    monthly_page_views: float | None = None
    average_attendance: float | None = None
    expected_attendees: float | None = None


class AdvertisingLineItem(BaseModel):
    """One purchasable unit inside a publication channel.

    Uses Decimal for the unit price -- float inputs are rejected.
    """

    model_config = ConfigDict(frozen=True)

    channel: Channel
    item_name: str
    item_path: str
    pricing_model: PricingModel = PricingModel.FLAT
    unit_price: Decimal = Decimal("0")
    spots_per_show: int | None = None
    days_per_week: float | None = None
    performance_metrics: PerformanceMetrics | None = None
    audience_metrics: AudienceMetrics | None = None
    monthly_impressions: float | None = None

    @field_validator("channel", mode="before")
    @classmethod
    def resolve_channel(cls, v: object) -> object:
        """Accept legacy channel aliases such as ``email``."""
        if isinstance(v, str):
            return parse_channel(v)
        return v

    @field_validator("pricing_model", mode="before")
    @classmethod
    def resolve_pricing_model(cls, v: object) -> object:
        """Accept legacy pricing model aliases such as ``per_month``."""
        if isinstance(v, str):
            return parse_pricing_model(v)
        return v

    @field_validator("unit_price", mode="before")
    @classmethod
    def reject_float_inputs(cls, v: object) -> object:
        """Reject float inputs for the unit price to prevent precision errors."""
        if isinstance(v, float):
            raise ValueError("Use Decimal or string, not float, for unit_price")
        return v

    @field_validator("unit_price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        """Ensure unit_price is zero or positive."""
        if v < 0:
            raise ValueError("unit_price must not be negative")
        return v

    def resolve_audience(self) -> float:
        """Return the item's audience size.

        Priority: item-level performance metrics, then the channel-level
        audience metric matching the item's channel. Returns 0 when neither
        is available.
        """
        if self.performance_metrics is not None and self.performance_metrics.audience_size:
            return self.performance_metrics.audience_size

        metrics = self.audience_metrics
        if metrics is None:
            return 0

        match self.channel:
            case Channel.WEBSITE:
                value = metrics.monthly_visitors
            case Channel.PRINT:
                value = metrics.circulation
            case Channel.NEWSLETTER | Channel.STREAMING:
                value = metrics.subscribers
            case Channel.SOCIAL:
                value = metrics.followers
            case Channel.PODCAST | Channel.RADIO:
                value = metrics.listeners
            case Channel.EVENTS:
                value = metrics.average_attendance or metrics.expected_attendees
        return value or 0

    def resolve_impressions(self) -> float:
        """Return the item's monthly impressions, or 0 when unknown.

        Priority: derived ``impressions_per_month``, then website page views,
        then the legacy ``monthly_impressions`` field.
        """
        if self.performance_metrics is not None and self.performance_metrics.impressions_per_month:
            return self.performance_metrics.impressions_per_month

        if (
            self.channel == Channel.WEBSITE
            and self.audience_metrics is not None
            and self.audience_metrics.monthly_page_views
        ):
            return self.audience_metrics.monthly_page_views

        return self.monthly_impressions or 0


class SelectedItem(AdvertisingLineItem):
    """A line item chosen into a package, with the operator's purchase frequency.

    ``current_frequency`` is a count of weeks, days or placements for per-unit
    models and a 0-100 share of available impressions for cpm/cpv/cpc.
    Excluded items stay in the selection but contribute nothing to totals.
    """

    current_frequency: int = Field(default=1, ge=0)
    is_excluded: bool = False


class PublicationSelection(BaseModel):
    """One publication and the ordered items selected from it."""

    model_config = ConfigDict(frozen=True)

    publication_id: int | str
    publication_name: str = ""
    geography: str | None = None
    items: list[SelectedItem] = Field(default_factory=list)

    def active_items(self) -> list[SelectedItem]:
        """Return the items that are not excluded, in selection order."""
        return [item for item in self.items if not item.is_excluded]


class PackageSelection(BaseModel):
    """The set of publications a package is assembled from."""

    model_config = ConfigDict(frozen=True)

    publications: list[PublicationSelection] = Field(default_factory=list)

    @model_validator(mode="after")
    def publication_ids_must_be_unique(self) -> "PackageSelection":
        """Ensure each publication appears only once in the package."""
        seen: set[int | str] = set()
        for publication in self.publications:
            if publication.publication_id in seen:
                raise ValueError(
                    f"publication {publication.publication_id!r} appears more than once"
                )
            seen.add(publication.publication_id)
        return self
