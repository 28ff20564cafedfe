"""Human-readable labels for reach summaries."""

from adpackage.domain.types import CalculationMethod, Channel, parse_channel
from adpackage.reach.aggregator import ReachSummary

CHANNEL_LABELS: dict[Channel, str] = {
    Channel.WEBSITE: "Website",
    Channel.PRINT: "Print",
    Channel.NEWSLETTER: "Newsletter",
    Channel.SOCIAL: "Social Media",
    Channel.PODCAST: "Podcast",
    Channel.RADIO: "Radio",
    Channel.STREAMING: "Streaming",
    Channel.EVENTS: "Events",
}


def format_reach_number(reach: float) -> str:
    """Abbreviate a reach figure: ``1.2M``, ``45.0K``, or ``950``."""
    if reach >= 1_000_000:
        return f"{reach / 1_000_000:.1f}M"
    if reach >= 1_000:
        return f"{reach / 1_000:.1f}K"
    return f"{round(reach):,}"


def channel_label(channel: Channel | str) -> str:
    """Return the display label for a channel tag.

    Raises:
        UnknownChannelError: If the tag is not a known channel.
    """
    return CHANNEL_LABELS[parse_channel(channel)]


def describe_reach(summary: ReachSummary) -> str:
    """Explain how a reach estimate was derived.

    Args:
        summary: The reach summary to describe.

    Returns:
        A one-line description, e.g.
        ``"2 publications across 3 channels, 25% overlap estimated"``.
    """
    if summary.calculation_method == CalculationMethod.IMPRESSIONS:
        return "Based on impression data"

    overlap_percent = round((1 - summary.overlap_factor) * 100)
    channels = summary.channels_count
    plural = "s" if channels != 1 else ""

    if summary.publications_count == 1:
        subject = "Single publication"
    else:
        subject = f"{summary.publications_count} publications"
    return f"{subject} across {channels} channel{plural}, {overlap_percent}% overlap estimated"
