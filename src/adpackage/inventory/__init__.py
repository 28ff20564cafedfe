"""Publication inventory documents to typed line items and selections."""

from adpackage.inventory.catalog import (
    build_publication_selection,
    extract_line_items,
    parse_commitment_multiplier,
    select_base_pricing,
    select_item,
)

__all__ = [
    "build_publication_selection",
    "extract_line_items",
    "parse_commitment_multiplier",
    "select_base_pricing",
    "select_item",
]
