"""Command-line interface for the package pricing engine.

Subcommands:

- ``sync`` recomputes performance metrics on a publication document.
- ``select`` turns publication documents into a package selection with every
  item included.
- ``quote`` prices a package selection and estimates its reach.

Usage::

    adpackage sync publication.json
    adpackage select daily-news.json metro-radio.json > package.json
    adpackage quote package.json --budget 5000 --format json
"""

from __future__ import annotations

import argparse
import json
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from adpackage.config import Settings, get_settings
from adpackage.domain.errors import PackageEngineError
from adpackage.domain.models import PackageSelection
from adpackage.engine_config import load_engine_config
from adpackage.inventory.catalog import build_publication_selection
from adpackage.metrics.sync import sync_publication
from adpackage.observability import configure_logging
from adpackage.pricing.engine import BudgetCheck, validate_budget
from adpackage.quote import PackageQuote, quote_package
from adpackage.reach.formatting import channel_label, describe_reach, format_reach_number

logger = structlog.get_logger()


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that converts Decimal values to strings."""

    def default(self, o: object) -> Any:
        if isinstance(o, Decimal):
            return str(o)
        return super().default(o)


def _budget(value: str) -> Decimal:
    try:
        budget = Decimal(value)
    except InvalidOperation:
        msg = f"invalid budget: {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if budget < 0:
        msg = f"budget must not be negative: {value!r}"
        raise argparse.ArgumentTypeError(msg)
    return budget


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``adpackage`` command.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="adpackage",
        description="Price multi-publication advertising packages and estimate their reach",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to engine config YAML (default: ENGINE_CONFIG_PATH or config/engine.yaml)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Recompute performance metrics on a publication")
    sync.add_argument("publication", type=Path, help="Publication document (JSON)")

    select = subparsers.add_parser(
        "select", help="Build a package selection from publication documents"
    )
    select.add_argument("publications", type=Path, nargs="+", help="Publication documents (JSON)")

    quote = subparsers.add_parser("quote", help="Price a package selection and estimate reach")
    quote.add_argument("package", type=Path, help="Package selection (JSON)")
    quote.add_argument(
        "--budget",
        type=_budget,
        default=None,
        help="Monthly budget to check the package against",
    )
    quote.add_argument(
        "--format",
        type=str,
        choices=["table", "json"],
        default="table",
        dest="output_format",
        help="Output format (default: table)",
    )

    return parser


def format_table(quote: PackageQuote, budget_check: BudgetCheck | None = None) -> str:
    """Format a package quote as a human-readable table.

    Columns: Publication, Item, Channel, Model, Freq, Monthly. Excluded items
    are marked and shown at zero cost. Totals and the reach summary follow.

    Args:
        quote: The package quote.
        budget_check: Optional budget check to report after the totals.

    Returns:
        Formatted table string with header row.
    """
    if not quote.publications:
        return "No publications selected."

    headers = ["Publication", "Item", "Channel", "Model", "Freq", "Monthly"]
    widths = [20, 30, 12, 12, 5, 12]

    def truncate(value: object, width: int) -> str:
        s = str(value)
        if len(s) > width:
            return s[: width - 3] + "..."
        return s

    lines: list[str] = []

    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths, strict=True))
    lines.append(header_line)
    lines.append("-" * len(header_line))

    for publication in quote.publications:
        name = publication.publication_name or str(publication.publication_id)
        for item in publication.items:
            item_name = f"{item.item_name} (excluded)" if item.is_excluded else item.item_name
            cells = [
                truncate(name, widths[0]),
                truncate(item_name, widths[1]),
                truncate(channel_label(item.channel), widths[2]),
                truncate(item.pricing_model, widths[3]),
                truncate(item.current_frequency, widths[4]),
                f"${item.monthly_cost:,}",
            ]
            lines.append("  ".join(c.ljust(w) for c, w in zip(cells, widths, strict=True)))
        lines.append(f"{'':<20}  {'Publication total':<30}  ${publication.total:,}")

    reach = quote.reach
    lines.append("")
    lines.append(f"Total monthly cost: ${quote.total_monthly_cost:,}")
    if budget_check is not None:
        status = "within budget" if budget_check.valid else f"over by ${budget_check.overage:,}"
        lines.append(f"Budget used: {budget_check.percentage_used}% ({status})")
    lines.append(f"Estimated unique reach: {format_reach_number(reach.estimated_unique_reach)}")
    lines.append(f"Estimated total reach: {format_reach_number(reach.estimated_total_reach)}")
    lines.append(f"Monthly impressions: {format_reach_number(reach.total_monthly_impressions)}")
    lines.append(f"Monthly exposures: {format_reach_number(reach.total_monthly_exposures)}")
    for channel, audience in reach.channel_audiences.items():
        lines.append(f"  {channel_label(channel)}: {format_reach_number(audience)}")
    lines.append(describe_reach(reach))

    return "\n".join(lines)


def format_json(quote: PackageQuote, budget_check: BudgetCheck | None = None) -> str:
    """Format a package quote as a JSON string.

    Args:
        quote: The package quote.
        budget_check: Optional budget check, emitted under ``"budget"``.

    Returns:
        Pretty-printed JSON string with Decimal amounts as strings.
    """
    payload: dict[str, Any] = quote.model_dump()
    if budget_check is not None:
        payload["budget"] = budget_check.model_dump()
    return json.dumps(payload, indent=2, cls=_DecimalEncoder)


def _read_json(path: Path, *, decimals: bool = False) -> Any:
    text = path.read_text(encoding="utf-8")
    if decimals:
        return json.loads(text, parse_float=Decimal)
    return json.loads(text)


def _run(args: argparse.Namespace, settings: Settings) -> str:
    engine_config = load_engine_config(args.config or settings.engine_config_path)

    if args.command == "sync":
        document = _read_json(args.publication)
        synced = sync_publication(document, engine_config.cadence_table())
        return json.dumps(synced, indent=2)

    if args.command == "select":
        selection = PackageSelection(
            publications=[
                build_publication_selection(_read_json(path), engine_config.cadence_table())
                for path in args.publications
            ]
        )
        return selection.model_dump_json(indent=2)

    selection = PackageSelection.model_validate(_read_json(args.package, decimals=True))
    quote = quote_package(selection, engine_config.overlap)
    budget_check = validate_budget(selection, args.budget) if args.budget is not None else None
    logger.info(
        "package_quoted",
        publications=len(quote.publications),
        total_monthly_cost=str(quote.total_monthly_cost),
    )
    if args.output_format == "json":
        return format_json(quote, budget_check)
    return format_table(quote, budget_check)


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, run the chosen subcommand, and print its output."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(production=settings.production, log_level=settings.log_level)

    try:
        output = _run(args, settings)
    except (OSError, json.JSONDecodeError, ValidationError, PackageEngineError) as exc:
        logger.error("command_failed", command=args.command, error=str(exc))
        parser.exit(1, f"adpackage: error: {exc}\n")

    print(output)


if __name__ == "__main__":
    main()
