"""Package reach aggregation, overlap coefficients, and reach labels."""

from adpackage.reach.aggregator import ReachSummary, aggregate_reach, round_half_up
from adpackage.reach.formatting import channel_label, describe_reach, format_reach_number
from adpackage.reach.overlap import DEFAULT_OVERLAP_CONFIG, OverlapConfig, select_overlap_factor

__all__ = [
    "DEFAULT_OVERLAP_CONFIG",
    "OverlapConfig",
    "ReachSummary",
    "aggregate_reach",
    "channel_label",
    "describe_reach",
    "format_reach_number",
    "round_half_up",
    "select_overlap_factor",
]
