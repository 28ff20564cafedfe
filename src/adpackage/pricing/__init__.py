"""Item cost calculation and purchase frequency planning.

Re-exports key functions and types for convenient access:
    from adpackage.pricing import monthly_cost, package_total, validate_budget
"""

from adpackage.pricing.engine import (
    DEFAULT_CLICK_THROUGH_RATE,
    TWO_PLACES,
    BudgetCheck,
    impression_share_cost,
    monthly_cost,
    package_total,
    publication_total,
    validate_budget,
)
from adpackage.pricing.frequency import (
    BulkAdjustmentPreview,
    FrequencyChange,
    FrequencyStrategy,
    PublicationFrequencyType,
    apply_frequency_strategy,
    detect_publication_frequency_type,
    preview_bulk_adjustment,
    toggle_exclusion,
    with_frequency,
)

__all__ = [
    "DEFAULT_CLICK_THROUGH_RATE",
    "TWO_PLACES",
    "BudgetCheck",
    "BulkAdjustmentPreview",
    "FrequencyChange",
    "FrequencyStrategy",
    "PublicationFrequencyType",
    "apply_frequency_strategy",
    "detect_publication_frequency_type",
    "impression_share_cost",
    "monthly_cost",
    "package_total",
    "preview_bulk_adjustment",
    "publication_total",
    "toggle_exclusion",
    "validate_budget",
    "with_frequency",
]
