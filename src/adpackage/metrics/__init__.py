"""Cadence normalization and performance metrics synchronization.

Re-exports key functions for convenient access:
    from adpackage.metrics import occurrences_per_month, sync_channel_metrics
"""

from adpackage.metrics.cadence import (
    CADENCE_TO_MONTHLY,
    DEFAULT_OCCURRENCES_PER_MONTH,
    WEEKS_PER_MONTH,
    merge_cadence_table,
    occurrences_per_month,
)
from adpackage.metrics.sync import (
    CHANNEL_DOCUMENT_KEYS,
    calculate_performance_metrics,
    sync_channel_metrics,
    sync_distribution_channels,
    sync_publication,
)

__all__ = [
    "CADENCE_TO_MONTHLY",
    "CHANNEL_DOCUMENT_KEYS",
    "DEFAULT_OCCURRENCES_PER_MONTH",
    "WEEKS_PER_MONTH",
    "calculate_performance_metrics",
    "merge_cadence_table",
    "occurrences_per_month",
    "sync_channel_metrics",
    "sync_distribution_channels",
    "sync_publication",
]
