"""CLI entry point for Supply Tracker."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from .alerts import count_alerts, generate_alerts
from .catalog import STANDARD_CATEGORIES
from .category_scorer import (
    overall_preparedness,
    score_all_categories,
    score_category,
    target_for_template,
)
from .config import ConfigError, ConfigManager
from .date_utils import parse_date_only
from .item_matching import item_matches_template
from .item_status import item_status
from .models import DEFAULT_OPTIONS, CalculationOptions, CategoryStatusSummary, InventoryItem
from .output_formatter import OutputFormatter
from .quantity_calculator import applicable_templates
from .shortage import missing_for_group
from .snapshot import Snapshot, SnapshotError, SnapshotStore

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="supply",
    help="Emergency supply adequacy for your household",
    no_args_is_help=True,
)


class UnknownCategoryError(Exception):
    """Raised when a category id matches neither the standard categories nor the templates."""


# Global state for formatter and config (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None
snapshot_store: SnapshotStore | None = None
options: CalculationOptions = DEFAULT_OPTIONS
as_of: date | None = None


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def get_snapshot_store() -> SnapshotStore:
    """Get or create SnapshotStore instance using config values."""
    global snapshot_store
    if snapshot_store is None:
        snapshot_store = SnapshotStore(get_config().data.storage_dir)
    return snapshot_store


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    root.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


def category_ids(snapshot: Snapshot) -> list[str]:
    """Standard categories followed by any extra ones the templates use."""
    ids = list(STANDARD_CATEGORIES)
    for template in snapshot.templates:
        if template.category not in ids:
            ids.append(template.category)
    return ids


def _require_category(snapshot: Snapshot, category_id: str) -> None:
    if category_id not in category_ids(snapshot):
        raise UnknownCategoryError(f"Unknown category: {category_id}")


def item_target(item: InventoryItem, snapshot: Snapshot) -> int:
    """Target quantity of the first applicable template the item counts towards."""
    for template in applicable_templates(
        snapshot.templates,
        snapshot.household,
        item.category_id,
        disabled_template_ids=snapshot.settings.disabled_template_ids,
    ):
        if item_matches_template(item, template.id):
            return target_for_template(
                template, snapshot.household, snapshot.items, snapshot.templates, options
            )
    return 0


def _summaries(snapshot: Snapshot) -> list[CategoryStatusSummary]:
    return score_all_categories(
        category_ids(snapshot),
        snapshot.items,
        snapshot.household,
        snapshot.templates,
        disabled_template_ids=snapshot.settings.disabled_template_ids,
        disabled_category_ids=snapshot.settings.disabled_category_ids,
        options=options,
        as_of=as_of,
    )


def _fail(e: Exception) -> None:
    if isinstance(e, SnapshotError):
        formatter.error(str(e), error_code="SNAPSHOT_ERROR")
    elif isinstance(e, UnknownCategoryError):
        formatter.error(str(e), error_code="UNKNOWN_CATEGORY")
    elif isinstance(e, ConfigError):
        formatter.error(str(e), error_code="CONFIG_ERROR")
    else:
        logger.debug("Unexpected error", exc_info=True)
        formatter.error(str(e))
    raise typer.Exit(code=1)


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    data_dir: Annotated[Path | None, typer.Option("--data-dir", help="Data directory path")] = None,
    config_path: Annotated[
        Path | None, typer.Option("--config", help="Path to a config.toml file")
    ] = None,
    as_of_date: Annotated[
        str | None,
        typer.Option("--as-of", help="Evaluate expiration dates as of YYYY-MM-DD (default: today)"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging")] = False,
) -> None:
    """Supply Tracker CLI - Check whether your emergency supplies are enough."""
    global formatter, config, snapshot_store, options, as_of

    formatter = OutputFormatter(json_mode=json_output)
    _configure_logging(verbose)

    try:
        as_of = parse_date_only(as_of_date) if as_of_date else None
    except ValueError:
        formatter.error(f"Invalid --as-of date: {as_of_date}", error_code="INVALID_DATE")
        raise typer.Exit(code=1)

    try:
        config = ConfigManager(config_path)
        options = config.calculation_options()
    except Exception as e:
        _fail(e)

    # CLI --data-dir overrides config, which overrides default
    effective_data_dir = data_dir if data_dir else config.data.storage_dir
    logger.debug("Using data directory %s", effective_data_dir)
    snapshot_store = SnapshotStore(effective_data_dir)


@app.command()
def status() -> None:
    """Show overall preparedness and every category's status."""
    try:
        snapshot = get_snapshot_store().load()
        overview = overall_preparedness(_summaries(snapshot), options)

        output_data = {
            "success": True,
            "message": f"Overall preparedness: {overview.overall_percentage:.0f}%",
            "data": {"overview": overview.model_dump()},
        }
        formatter.output(output_data, output_data["message"])
    except Exception as e:
        _fail(e)


@app.command()
def category(
    category_id: Annotated[str, typer.Argument(help="Category ID, e.g. water-beverages")],
) -> None:
    """Show one category's status and shortages."""
    try:
        snapshot = get_snapshot_store().load()
        _require_category(snapshot, category_id)

        summary = score_category(
            category_id,
            snapshot.items,
            snapshot.household,
            snapshot.templates,
            disabled_template_ids=snapshot.settings.disabled_template_ids,
            options=options,
            as_of=as_of,
        )

        output_data = {
            "success": True,
            "data": {
                "category": summary.model_dump(),
                "disabled": category_id in snapshot.settings.disabled_category_ids,
            },
        }
        formatter.output(output_data)
    except Exception as e:
        _fail(e)


@app.command()
def items(
    category_id: Annotated[
        str | None, typer.Option("--category", "-c", help="Only items in this category")
    ] = None,
) -> None:
    """List inventory items with their status and missing quantity."""
    try:
        snapshot = get_snapshot_store().load()
        if category_id:
            _require_category(snapshot, category_id)

        rows: list[dict[str, Any]] = []
        for item in snapshot.items:
            if category_id and item.category_id != category_id:
                continue
            target = item_target(item, snapshot)
            row = item.model_dump()
            row["target_quantity"] = target
            row["status"] = item_status(item, target, options, as_of)
            row["missing"] = missing_for_group(item, snapshot.items, target, options, as_of)
            rows.append(row)

        output_data = {
            "success": True,
            "data": {"items": rows, "total_items": len(rows)},
        }
        formatter.output(output_data)
    except Exception as e:
        _fail(e)


@app.command()
def recommend(
    category_id: Annotated[
        str | None, typer.Option("--category", "-c", help="Only this category")
    ] = None,
) -> None:
    """Show how much of each recommended item the household should keep."""
    try:
        snapshot = get_snapshot_store().load()
        if category_id:
            _require_category(snapshot, category_id)

        recommendations = []
        for template in applicable_templates(
            snapshot.templates,
            snapshot.household,
            category_id,
            disabled_template_ids=snapshot.settings.disabled_template_ids,
            disabled_category_ids=snapshot.settings.disabled_category_ids,
        ):
            quantity = target_for_template(
                template, snapshot.household, snapshot.items, snapshot.templates, options
            )
            if quantity == 0:
                continue
            recommendations.append(
                {
                    "template_id": template.id,
                    "category_id": template.category,
                    "quantity": quantity,
                    "unit": template.unit,
                }
            )

        output_data = {
            "success": True,
            "data": {"recommendations": recommendations},
        }
        formatter.output(output_data)
    except Exception as e:
        _fail(e)


@app.command()
def shortages() -> None:
    """List every shortage across enabled categories."""
    try:
        snapshot = get_snapshot_store().load()

        rows = []
        for summary in _summaries(snapshot):
            for shortage in summary.shortages:
                row = shortage.model_dump()
                row["category_id"] = summary.category_id
                rows.append(row)

        output_data = {
            "success": True,
            "data": {"shortages": rows, "total_shortages": len(rows)},
        }
        formatter.output(output_data)
    except Exception as e:
        _fail(e)

@app.command()
def alerts() -> None:
    """Show expired items, low categories and water shortages, most urgent first."""
    try:
        snapshot = get_snapshot_store().load()
        found = generate_alerts(
            category_ids(snapshot),
            snapshot.items,
            snapshot.household,
            snapshot.templates,
            disabled_template_ids=snapshot.settings.disabled_template_ids,
            disabled_category_ids=snapshot.settings.disabled_category_ids,
            options=options,
            as_of=as_of,
        )

        output_data = {
            "success": True,
            "data": {
                "alerts": [alert.model_dump() for alert in found],
                "counts": count_alerts(found).model_dump(),
            },
        }
        formatter.output(output_data)
    except Exception as e:
        _fail(e)



if __name__ == "__main__":
    app()
