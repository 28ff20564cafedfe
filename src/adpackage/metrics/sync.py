"""Performance metrics synchronization for publication inventory documents.

Recomputes ``performanceMetrics`` on every advertising opportunity from the
channel's current source metric (circulation, subscribers, listeners,
followers, visitors, attendance) so that ``audienceSize`` and
``impressionsPerMonth`` stay in step with the numbers a publisher edits.

Every function here is pure: documents are copied, never mutated, and running
the sync twice on the same input yields identical metrics. Entries without an
``advertisingOpportunities`` list are returned unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from adpackage.domain.types import Channel, parse_channel
from adpackage.metrics.cadence import WEEKS_PER_MONTH, occurrences_per_month

logger = structlog.get_logger()

# Social posts are estimated at ~4 per week
SOCIAL_POSTS_PER_MONTH = 17

# Websites are always-on inventory
WEBSITE_DAYS_PER_MONTH = 30

# Keys under ``distributionChannels`` holding each channel's data
CHANNEL_DOCUMENT_KEYS: dict[Channel, str] = {
    Channel.PRINT: "print",
    Channel.NEWSLETTER: "newsletters",
    Channel.PODCAST: "podcasts",
    Channel.RADIO: "radioStations",
    Channel.STREAMING: "streamingVideo",
    Channel.SOCIAL: "socialMedia",
    Channel.WEBSITE: "website",
    Channel.EVENTS: "events",
}

Document = dict[str, Any]
Cadences = Mapping[str, float] | None


def calculate_performance_metrics(
    audience_size: float,
    occurrences: float,
    existing: Mapping[str, Any] | None = None,
) -> Document:
    """Build a ``performanceMetrics`` record, keeping any existing guarantee flag.

    Args:
        audience_size: The channel's source audience.
        occurrences: Occurrences per month for this item.
        existing: The item's current ``performanceMetrics``, if any.

    Returns:
        A new camelCase metrics record.
    """
    guaranteed = existing.get("guaranteed") if isinstance(existing, Mapping) else None
    return {
        "audienceSize": audience_size,
        "occurrencesPerMonth": occurrences,
        "impressionsPerMonth": audience_size * occurrences,
        "guaranteed": True if guaranteed is None else guaranteed,
    }


def _first_number(*values: Any) -> float:
    """Return the first truthy numeric value, or 0."""
    for value in values:
        if isinstance(value, bool):
            continue
        if isinstance(value, int | float) and value:
            return value
    return 0


def _sync_opportunities(
    entry: Mapping[str, Any],
    audience_size: float,
    occurrences: float,
    use_spots_per_show: bool = False,
) -> Document:
    """Return a copy of *entry* with each opportunity's metrics recomputed."""
    ads = entry.get("advertisingOpportunities")
    if not isinstance(ads, list):
        return dict(entry)

    synced_ads = []
    for ad in ads:
        if not isinstance(ad, Mapping):
            synced_ads.append(ad)
            continue
        effective = occurrences
        if use_spots_per_show:
            effective = occurrences * (_first_number(ad.get("spotsPerShow")) or 1)
        synced_ads.append(
            {
                **ad,
                "performanceMetrics": calculate_performance_metrics(
                    audience_size, effective, ad.get("performanceMetrics")
                ),
            }
        )
    return {**entry, "advertisingOpportunities": synced_ads}


def _map_entries(data: Any, sync_entry: Any) -> Any:
    """Apply *sync_entry* to a list of channel entries, or to a single entry."""
    if isinstance(data, list):
        return [sync_entry(entry) if isinstance(entry, Mapping) else entry for entry in data]
    if isinstance(data, Mapping):
        return sync_entry(data)
    return data


def sync_print(data: Any, cadences: Cadences = None) -> Any:
    """Sync print ads: audience is circulation at the print cadence."""

    def sync_entry(entry: Mapping[str, Any]) -> Document:
        return _sync_opportunities(
            entry,
            _first_number(entry.get("circulation")),
            occurrences_per_month(entry.get("frequency"), cadences),
        )

    return _map_entries(data, sync_entry)


def sync_newsletters(data: Any, cadences: Cadences = None) -> Any:
    """Sync newsletter placements: audience is subscribers at the send cadence."""

    def sync_entry(entry: Mapping[str, Any]) -> Document:
        return _sync_opportunities(
            entry,
            _first_number(entry.get("subscribers")),
            occurrences_per_month(entry.get("frequency"), cadences),
        )

    return _map_entries(data, sync_entry)


def sync_podcasts(data: Any, cadences: Cadences = None) -> Any:
    """Sync podcast reads: audience is average listeners, else downloads."""

    def sync_entry(entry: Mapping[str, Any]) -> Document:
        return _sync_opportunities(
            entry,
            _first_number(entry.get("averageListeners"), entry.get("averageDownloads")),
            occurrences_per_month(entry.get("frequency"), cadences),
        )

    return _map_entries(data, sync_entry)


def sync_radio(data: Any, cadences: Cadences = None) -> Any:
    """Sync radio stations and their shows.

    Station-level ads run daily against the station's listeners. Show-level
    ads use the show's own listeners (falling back to the station's), run
    ``daysPerWeek * 4.33`` times a month when the show declares its days and
    at the show cadence otherwise, multiplied per ad by ``spotsPerShow``.
    """

    def sync_entry(station: Mapping[str, Any]) -> Document:
        station_listeners = _first_number(station.get("listeners"))
        synced = _sync_opportunities(
            station, station_listeners, occurrences_per_month("daily", cadences)
        )

        shows = station.get("shows")
        if isinstance(shows, list):
            synced_shows = []
            for show in shows:
                if not isinstance(show, Mapping):
                    synced_shows.append(show)
                    continue
                days_per_week = _first_number(show.get("daysPerWeek"))
                if days_per_week:
                    show_occurrences = days_per_week * WEEKS_PER_MONTH
                else:
                    show_occurrences = occurrences_per_month(show.get("frequency"), cadences)
                synced_shows.append(
                    _sync_opportunities(
                        show,
                        _first_number(show.get("averageListeners"), station_listeners),
                        show_occurrences,
                        use_spots_per_show=True,
                    )
                )
            synced["shows"] = synced_shows
        return synced

    return _map_entries(data, sync_entry)


def sync_streaming(data: Any, cadences: Cadences = None) -> Any:
    """Sync streaming pre-rolls: subscribers (else views), weekly by default."""

    def sync_entry(entry: Mapping[str, Any]) -> Document:
        return _sync_opportunities(
            entry,
            _first_number(entry.get("subscribers"), entry.get("averageViews")),
            occurrences_per_month(entry.get("frequency") or "weekly", cadences),
            use_spots_per_show=True,
        )

    return _map_entries(data, sync_entry)


def sync_social(data: Any, cadences: Cadences = None) -> Any:
    """Sync social posts: followers at a fixed posting rate."""

    def sync_entry(entry: Mapping[str, Any]) -> Document:
        metrics = entry.get("metrics")
        nested = metrics.get("followers") if isinstance(metrics, Mapping) else None
        return _sync_opportunities(
            entry,
            _first_number(nested, entry.get("followers")),
            SOCIAL_POSTS_PER_MONTH,
        )

    return _map_entries(data, sync_entry)


def sync_website(data: Any, cadences: Cadences = None) -> Any:
    """Sync website display units: monthly visitors, always live."""

    def sync_entry(entry: Mapping[str, Any]) -> Document:
        metrics = entry.get("metrics")
        nested = metrics.get("monthlyVisitors") if isinstance(metrics, Mapping) else None
        return _sync_opportunities(
            entry,
            _first_number(nested, entry.get("monthlyVisitors")),
            WEBSITE_DAYS_PER_MONTH,
        )

    return _map_entries(data, sync_entry)


def sync_events(data: Any, cadences: Cadences = None) -> Any:
    """Sync event sponsorships: attendance at the event cadence, annual by default."""

    def sync_entry(entry: Mapping[str, Any]) -> Document:
        return _sync_opportunities(
            entry,
            _first_number(entry.get("averageAttendance"), entry.get("expectedAttendees")),
            occurrences_per_month(entry.get("frequency") or "annual", cadences),
        )

    return _map_entries(data, sync_entry)


def sync_channel_metrics(
    channel: Channel | str,
    channel_data: Any,
    cadences: Cadences = None,
) -> Any:
    """Recompute performance metrics for one channel's data.

    Args:
        channel: The channel the data belongs to.
        channel_data: The raw channel value (a list of entries, or a single
            entry for website and some print documents).
        cadences: Optional cadence table overriding the defaults.

    Returns:
        A new channel data structure with metrics recomputed.

    Raises:
        UnknownChannelError: If *channel* is not a known channel tag.
    """
    match parse_channel(channel):
        case Channel.PRINT:
            return sync_print(channel_data, cadences)
        case Channel.NEWSLETTER:
            return sync_newsletters(channel_data, cadences)
        case Channel.PODCAST:
            return sync_podcasts(channel_data, cadences)
        case Channel.RADIO:
            return sync_radio(channel_data, cadences)
        case Channel.STREAMING:
            return sync_streaming(channel_data, cadences)
        case Channel.SOCIAL:
            return sync_social(channel_data, cadences)
        case Channel.WEBSITE:
            return sync_website(channel_data, cadences)
        case Channel.EVENTS:
            return sync_events(channel_data, cadences)


def sync_distribution_channels(
    distribution_channels: Mapping[str, Any] | None,
    cadences: Cadences = None,
) -> Any:
    """Recompute performance metrics across all of a publication's channels.

    Keys that do not hold channel data are copied through unchanged.

    Args:
        distribution_channels: The publication's ``distributionChannels`` value.
        cadences: Optional cadence table overriding the defaults.

    Returns:
        A new ``distributionChannels`` mapping, or the input if it is empty.
    """
    if not distribution_channels:
        return distribution_channels

    synced = dict(distribution_channels)
    for channel, key in CHANNEL_DOCUMENT_KEYS.items():
        if synced.get(key):
            synced[key] = sync_channel_metrics(channel, synced[key], cadences)
    return synced


def sync_publication(publication: Mapping[str, Any], cadences: Cadences = None) -> Document:
    """Return a copy of a publication document with all channel metrics synced."""
    synced = dict(publication)
    if publication.get("distributionChannels"):
        synced["distributionChannels"] = sync_distribution_channels(
            publication["distributionChannels"], cadences
        )
    logger.debug(
        "publication_metrics_synced",
        publication_id=publication.get("publicationId"),
    )
    return synced
