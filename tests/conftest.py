"""Shared pytest fixtures for the adpackage test suite."""

from collections.abc import Callable, Iterator
from decimal import Decimal
from typing import Any

import pytest
from structlog.testing import capture_logs

from adpackage.domain.models import (
    AudienceMetrics,
    PackageSelection,
    PerformanceMetrics,
    PublicationSelection,
    SelectedItem,
)
from adpackage.domain.types import Channel, PricingModel


@pytest.fixture(autouse=True)
def _captured_logs() -> Iterator[list[dict[str, Any]]]:
    """Route structlog output into a list instead of stdout."""
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def make_item() -> Callable[..., SelectedItem]:
    """Factory for selected items with sensible defaults."""

    def _make(
        channel: Channel = Channel.PRINT,
        pricing_model: PricingModel = PricingModel.FLAT,
        unit_price: str = "100",
        current_frequency: int = 1,
        audience: float | None = None,
        occurrences: float = 1,
        is_excluded: bool = False,
        name: str = "Test placement",
        path: str = "distributionChannels.print[0].advertisingOpportunities[0]",
        **extra: Any,
    ) -> SelectedItem:
        metrics = None
        if audience is not None:
            metrics = PerformanceMetrics.from_source(audience, occurrences)
        return SelectedItem(
            channel=channel,
            item_name=name,
            item_path=path,
            pricing_model=pricing_model,
            unit_price=Decimal(unit_price),
            performance_metrics=metrics,
            current_frequency=current_frequency,
            is_excluded=is_excluded,
            **extra,
        )

    return _make


@pytest.fixture
def print_item(make_item: Callable[..., SelectedItem]) -> SelectedItem:
    """A monthly print ad reaching 25,000 readers."""
    return make_item(
        channel=Channel.PRINT,
        pricing_model=PricingModel.PER_AD,
        unit_price="500",
        audience=25_000,
        occurrences=1,
        name="Full page",
    )


@pytest.fixture
def newsletter_item(make_item: Callable[..., SelectedItem]) -> SelectedItem:
    """A weekly newsletter placement reaching 10,000 subscribers."""
    return make_item(
        channel=Channel.NEWSLETTER,
        pricing_model=PricingModel.PER_SEND,
        unit_price="150",
        audience=10_000,
        occurrences=4.33,
        current_frequency=4,
        name="Sponsored slot",
        path="distributionChannels.newsletters[0].advertisingOpportunities[0]",
    )


@pytest.fixture
def single_publication_package(
    print_item: SelectedItem, newsletter_item: SelectedItem
) -> PackageSelection:
    """One publication buying print and newsletter inventory."""
    return PackageSelection(
        publications=[
            PublicationSelection(
                publication_id=1,
                publication_name="Daily Chronicle",
                items=[print_item, newsletter_item],
            )
        ]
    )


@pytest.fixture
def website_only_item(make_item: Callable[..., SelectedItem]) -> Callable[[float], SelectedItem]:
    """Factory for a flat website banner with only channel-level visitor counts."""

    def _make(visitors: float) -> SelectedItem:
        return make_item(
            channel=Channel.WEBSITE,
            pricing_model=PricingModel.MONTHLY,
            unit_price="750",
            name="Leaderboard",
            path="distributionChannels.website.advertisingOpportunities[0]",
            audience_metrics=AudienceMetrics(monthly_visitors=visitors),
        )

    return _make


@pytest.fixture
def publication_document() -> dict[str, Any]:
    """A publication inventory document spanning every channel."""
    return {
        "publicationId": 1001,
        "basicInfo": {
            "publicationName": "Lakeside Gazette",
            "primaryServiceArea": "Lakeside County",
        },
        "distributionChannels": {
            "print": [
                {
                    "name": "Weekly edition",
                    "frequency": "weekly",
                    "circulation": 20000,
                    "advertisingOpportunities": [
                        {
                            "name": "Half page",
                            "pricing": [
                                {"flatRate": 400, "pricingModel": "per_ad", "frequency": "4x"},
                                {"flatRate": 450, "pricingModel": "per_ad", "frequency": "1x"},
                            ],
                        }
                    ],
                }
            ],
            "newsletters": [
                {
                    "name": "Morning brief",
                    "frequency": "daily",
                    "subscribers": 8000,
                    "advertisingOpportunities": [
                        {
                            "name": "Top banner",
                            "pricing": {"flatRate": 75, "pricingModel": "per_send"},
                            "performanceMetrics": {"guaranteed": False},
                        }
                    ],
                }
            ],
            "website": {
                "url": "https://lakeside.example",
                "metrics": {"monthlyVisitors": 60000, "monthlyPageViews": 150000},
                "advertisingOpportunities": [
                    {
                        "name": "Run of site",
                        "pricing": {"flatRate": 12, "pricingModel": "cpm"},
                    }
                ],
            },
            "radioStations": [
                {
                    "callSign": "WLKS",
                    "listeners": 30000,
                    "advertisingOpportunities": [
                        {"name": "Station ID", "pricing": {"flatRate": 40, "pricingModel": "per_spot"}}
                    ],
                    "shows": [
                        {
                            "name": "Drive time",
                            "daysPerWeek": 5,
                            "averageListeners": 12000,
                            "advertisingOpportunities": [
                                {
                                    "name": "30s spot",
                                    "spotsPerShow": 2,
                                    "pricing": {"flatRate": 60, "pricingModel": "per_spot"},
                                }
                            ],
                        }
                    ],
                }
            ],
            "socialMedia": [
                {
                    "platform": "instagram",
                    "metrics": {"followers": 5000},
                    "advertisingOpportunities": [
                        {"name": "Sponsored post", "pricing": {"flatRate": 90, "pricingModel": "per_post"}}
                    ],
                }
            ],
            "events": [
                {
                    "name": "Summer fair",
                    "expectedAttendees": 3000,
                    "advertisingOpportunities": [
                        {"name": "Title sponsor", "pricing": {"flatRate": 2500, "pricingModel": "flat"}}
                    ],
                }
            ],
            "podcasts": [
                {
                    "name": "Lakeside Talks",
                    "frequency": "bi-weekly",
                    "averageDownloads": 4000,
                    "advertisingOpportunities": [
                        {"name": "Host read", "pricing": {"flatRate": 200, "pricingModel": "per_episode"}}
                    ],
                }
            ],
            "streamingVideo": [
                {
                    "name": "Lakeside Live",
                    "averageViews": 2500,
                    "advertisingOpportunities": [
                        {
                            "name": "Pre-roll",
                            "spotsPerShow": 3,
                            "pricing": {"flatRate": 5, "pricingModel": "cpv"},
                        }
                    ],
                }
            ],
            "notes": "Rates effective January",
        },
    }
