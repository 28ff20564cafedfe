"""Tests for performance metrics synchronization across channels."""

import copy
from typing import Any

import pytest

from adpackage.domain.errors import UnknownChannelError
from adpackage.domain.types import Channel
from adpackage.metrics.cadence import WEEKS_PER_MONTH
from adpackage.metrics.sync import (
    CHANNEL_DOCUMENT_KEYS,
    SOCIAL_POSTS_PER_MONTH,
    WEBSITE_DAYS_PER_MONTH,
    calculate_performance_metrics,
    sync_channel_metrics,
    sync_distribution_channels,
    sync_publication,
)


def _metrics(entry: dict[str, Any], index: int = 0) -> dict[str, Any]:
    return entry["advertisingOpportunities"][index]["performanceMetrics"]


class TestCalculatePerformanceMetrics:
    """Tests for building a single metrics record."""

    def test_impressions_are_audience_times_occurrences(self) -> None:
        metrics = calculate_performance_metrics(10_000, 4.33)
        assert metrics["audienceSize"] == 10_000
        assert metrics["occurrencesPerMonth"] == 4.33
        assert metrics["impressionsPerMonth"] == pytest.approx(43_300)

    def test_guaranteed_defaults_to_true(self) -> None:
        assert calculate_performance_metrics(100, 1)["guaranteed"] is True

    def test_existing_guaranteed_flag_is_preserved(self) -> None:
        metrics = calculate_performance_metrics(100, 1, {"guaranteed": False})
        assert metrics["guaranteed"] is False


class TestChannelSync:
    """Per-channel audience and cadence rules."""

    def test_print_uses_circulation_and_cadence(self) -> None:
        data = [{"circulation": 25000, "frequency": "monthly", "advertisingOpportunities": [{}]}]
        metrics = _metrics(sync_channel_metrics(Channel.PRINT, data)[0])
        assert metrics["audienceSize"] == 25000
        assert metrics["occurrencesPerMonth"] == 1
        assert metrics["impressionsPerMonth"] == 25000

    def test_print_single_entry_shape_is_preserved(self) -> None:
        data = {"circulation": 5000, "frequency": "weekly", "advertisingOpportunities": [{}]}
        synced = sync_channel_metrics(Channel.PRINT, data)
        assert isinstance(synced, dict)
        assert _metrics(synced)["impressionsPerMonth"] == pytest.approx(5000 * WEEKS_PER_MONTH)

    def test_newsletter_uses_subscribers_and_send_cadence(self) -> None:
        data = [{"subscribers": 10000, "frequency": "weekly", "advertisingOpportunities": [{}]}]
        metrics = _metrics(sync_channel_metrics(Channel.NEWSLETTER, data)[0])
        assert metrics["audienceSize"] == 10000
        assert metrics["occurrencesPerMonth"] == 4.33

    def test_podcast_prefers_listeners_over_downloads(self) -> None:
        data = [
            {
                "averageListeners": 3000,
                "averageDownloads": 5000,
                "frequency": "weekly",
                "advertisingOpportunities": [{}],
            }
        ]
        assert _metrics(sync_channel_metrics(Channel.PODCAST, data)[0])["audienceSize"] == 3000

    def test_podcast_falls_back_to_downloads(self) -> None:
        data = [{"averageDownloads": 5000, "advertisingOpportunities": [{}]}]
        metrics = _metrics(sync_channel_metrics(Channel.PODCAST, data)[0])
        assert metrics["audienceSize"] == 5000
        assert metrics["occurrencesPerMonth"] == 1

    def test_radio_station_ads_run_daily(self) -> None:
        data = [{"listeners": 20000, "advertisingOpportunities": [{}]}]
        metrics = _metrics(sync_channel_metrics(Channel.RADIO, data)[0])
        assert metrics["audienceSize"] == 20000
        assert metrics["occurrencesPerMonth"] == 30

    def test_radio_show_uses_days_per_week_and_spots(self) -> None:
        data = [
            {
                "listeners": 20000,
                "shows": [
                    {
                        "daysPerWeek": 5,
                        "averageListeners": 8000,
                        "advertisingOpportunities": [{"spotsPerShow": 3}],
                    }
                ],
            }
        ]
        show = sync_channel_metrics(Channel.RADIO, data)[0]["shows"][0]
        metrics = _metrics(show)
        assert metrics["audienceSize"] == 8000
        assert metrics["occurrencesPerMonth"] == pytest.approx(5 * WEEKS_PER_MONTH * 3)

    def test_radio_show_falls_back_to_station_listeners_and_cadence(self) -> None:
        data = [
            {
                "listeners": 20000,
                "shows": [{"frequency": "weekly", "advertisingOpportunities": [{}]}],
            }
        ]
        show = sync_channel_metrics(Channel.RADIO, data)[0]["shows"][0]
        metrics = _metrics(show)
        assert metrics["audienceSize"] == 20000
        assert metrics["occurrencesPerMonth"] == 4.33

    def test_streaming_defaults_to_weekly_with_spots(self) -> None:
        data = [{"averageViews": 2000, "advertisingOpportunities": [{"spotsPerShow": 2}]}]
        metrics = _metrics(sync_channel_metrics(Channel.STREAMING, data)[0])
        assert metrics["audienceSize"] == 2000
        assert metrics["occurrencesPerMonth"] == pytest.approx(4.33 * 2)

    def test_social_uses_nested_followers_at_fixed_rate(self) -> None:
        data = [
            {"metrics": {"followers": 4000}, "followers": 1, "advertisingOpportunities": [{}]}
        ]
        metrics = _metrics(sync_channel_metrics(Channel.SOCIAL, data)[0])
        assert metrics["audienceSize"] == 4000
        assert metrics["occurrencesPerMonth"] == SOCIAL_POSTS_PER_MONTH

    def test_social_falls_back_to_top_level_followers(self) -> None:
        data = [{"followers": 1500, "advertisingOpportunities": [{}]}]
        assert _metrics(sync_channel_metrics(Channel.SOCIAL, data)[0])["audienceSize"] == 1500

    def test_website_uses_monthly_visitors_always_on(self) -> None:
        data = {"metrics": {"monthlyVisitors": 50000}, "advertisingOpportunities": [{}]}
        metrics = _metrics(sync_channel_metrics(Channel.WEBSITE, data))
        assert metrics["audienceSize"] == 50000
        assert metrics["occurrencesPerMonth"] == WEBSITE_DAYS_PER_MONTH

    def test_events_default_to_annual(self) -> None:
        data = [{"expectedAttendees": 1200, "advertisingOpportunities": [{}]}]
        metrics = _metrics(sync_channel_metrics(Channel.EVENTS, data)[0])
        assert metrics["audienceSize"] == 1200
        assert metrics["occurrencesPerMonth"] == 0.083

    def test_missing_audience_yields_zero_impressions(self) -> None:
        data = [{"frequency": "weekly", "advertisingOpportunities": [{}]}]
        metrics = _metrics(sync_channel_metrics(Channel.NEWSLETTER, data)[0])
        assert metrics["audienceSize"] == 0
        assert metrics["impressionsPerMonth"] == 0

    def test_custom_cadence_table_is_honoured(self) -> None:
        data = [{"subscribers": 100, "frequency": "semi-weekly", "advertisingOpportunities": [{}]}]
        synced = sync_channel_metrics(Channel.NEWSLETTER, data, {"semi-weekly": 8.66})
        assert _metrics(synced[0])["occurrencesPerMonth"] == 8.66

    def test_legacy_alias_is_accepted(self) -> None:
        data = [{"subscribers": 100, "advertisingOpportunities": [{}]}]
        assert _metrics(sync_channel_metrics("email", data)[0])["audienceSize"] == 100

    def test_unknown_channel_raises(self) -> None:
        with pytest.raises(UnknownChannelError, match="billboard"):
            sync_channel_metrics("billboard", [])

    @pytest.mark.parametrize("channel", list(Channel), ids=[c.value for c in Channel])
    def test_every_channel_is_handled(self, channel: Channel) -> None:
        data = [{"advertisingOpportunities": [{}]}]
        synced = sync_channel_metrics(channel, data)
        assert "performanceMetrics" in synced[0]["advertisingOpportunities"][0]


class TestSyncInvariants:
    """Properties that hold for every synchronized document."""

    def test_entries_without_opportunities_are_unchanged(self) -> None:
        data = [{"circulation": 25000, "frequency": "weekly"}]
        assert sync_channel_metrics(Channel.PRINT, data) == data

    def test_input_is_not_mutated(self, publication_document: dict[str, Any]) -> None:
        original = copy.deepcopy(publication_document)
        sync_publication(publication_document)
        assert publication_document == original

    def test_sync_is_idempotent(self, publication_document: dict[str, Any]) -> None:
        once = sync_publication(publication_document)
        twice = sync_publication(once)
        assert once == twice

    def test_guaranteed_flag_survives_sync(self, publication_document: dict[str, Any]) -> None:
        synced = sync_publication(publication_document)
        newsletter = synced["distributionChannels"]["newsletters"][0]
        assert _metrics(newsletter)["guaranteed"] is False

    def test_impressions_equal_audience_times_occurrences(
        self, publication_document: dict[str, Any]
    ) -> None:
        synced = sync_publication(publication_document)["distributionChannels"]
        for key in CHANNEL_DOCUMENT_KEYS.values():
            entries = synced[key] if isinstance(synced[key], list) else [synced[key]]
            for entry in entries:
                for ad in entry.get("advertisingOpportunities", []):
                    metrics = ad["performanceMetrics"]
                    assert metrics["impressionsPerMonth"] == pytest.approx(
                        metrics["audienceSize"] * metrics["occurrencesPerMonth"]
                    )

    def test_non_channel_keys_pass_through(self, publication_document: dict[str, Any]) -> None:
        synced = sync_distribution_channels(publication_document["distributionChannels"])
        assert synced["notes"] == "Rates effective January"

    def test_empty_distribution_channels_returned_as_is(self) -> None:
        assert sync_distribution_channels({}) == {}
        assert sync_distribution_channels(None) is None

    def test_publication_without_channels_is_copied(self) -> None:
        publication = {"publicationId": 7}
        synced = sync_publication(publication)
        assert synced == publication
        assert synced is not publication
