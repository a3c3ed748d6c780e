"""Output formatting for CLI and programmatic use."""

import json
from datetime import date, datetime
from enum import Enum
from typing import Any
from uuid import UUID

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

STATUS_STYLES = {
    "ok": "green",
    "warning": "yellow",
    "critical": "red",
    "info": "blue",
}


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for output."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, datetime):
            return obj.isoformat()
        if isinstance(obj, date):
            return obj.isoformat()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        return super().default(obj)


def _status(value: Any) -> str:
    status = value.value if isinstance(value, Enum) else str(value)
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status}[/{style}]"


def _unit(value: Any) -> str:
    if value is None:
        return ""
    return value.value if isinstance(value, Enum) else str(value)


def _number(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


def _alert_message(alert: dict) -> str:
    kind = _unit(alert.get("kind"))
    if kind == "expired":
        return "Expired"
    if kind == "expiring_soon":
        return f"Expires in {alert.get('days')} days"
    if kind == "out_of_stock":
        return "Out of stock"
    if kind == "critically_low":
        return f"Critically low ({_number(alert.get('percentage'))}% of recommended)"
    if kind == "low_stock":
        return f"Running low ({_number(alert.get('percentage'))}% of recommended)"
    if kind == "water_shortage":
        return f"Need {_number(alert.get('liters'))} L more water for food"
    return kind


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, cls=JSONEncoder, indent=2))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {message}")

        payload = data.get("data", {})
        if "overview" in payload:
            self._render_overview(data)
        elif "category" in payload:
            self._render_category(data)
        elif "items" in payload:
            self._render_items(data)
        elif "recommendations" in payload:
            self._render_recommendations(data)
        elif "shortages" in payload:
            self._render_shortages(data)
        elif "alerts" in payload:
            self._render_alerts(data)

    def _render_overview(self, data: dict) -> None:
        """Render overall preparedness and the per-category table."""
        overview = data["data"]["overview"]

        self.console.print(
            Panel(
                f"Overall preparedness: [bold]{overview['overall_percentage']:.0f}%[/bold] "
                f"({_status(overview['status'])})",
                title="Emergency Supplies",
                expand=False,
            )
        )

        categories = overview.get("categories", [])
        if not categories:
            self.console.print("[dim]No categories enabled[/dim]")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Category", style="cyan")
        table.add_column("Complete", justify="right")
        table.add_column("Status")
        table.add_column("Types", justify="right")
        table.add_column("Shortages", justify="right")

        for summary in categories:
            table.add_row(
                summary["category_id"],
                f"{summary['completion_percentage']:.0f}%",
                _status(summary["status"]),
                f"{summary['fulfilled_item_types']}/{summary['total_item_types']}",
                str(len(summary.get("shortages", []))),
            )

        self.console.print(table)

    def _render_category(self, data: dict) -> None:
        """Render a single category summary with its shortages."""
        summary = data["data"]["category"]

        self.console.print(
            f"\n[bold]{summary['category_id']}[/bold]: "
            f"{summary['completion_percentage']:.0f}% ({_status(summary['status'])})"
        )
        self.console.print(
            f"Items: {summary['item_count']} "
            f"([red]{summary['critical_count']} critical[/red], "
            f"[yellow]{summary['warning_count']} warning[/yellow], "
            f"[green]{summary['ok_count']} ok[/green])"
        )

        if summary.get("total_needed_calories") is not None:
            self.console.print(
                f"Calories: {summary['total_actual_calories']:.0f} / "
                f"{summary['total_needed_calories']:.0f} kcal"
            )
        if summary.get("drinking_water_needed") is not None:
            self.console.print(
                f"Water: {_number(summary['drinking_water_needed'])} L drinking, "
                f"{_number(summary['preparation_water_needed'])} L for food preparation"
            )

        if not summary.get("has_recommendations"):
            self.console.print("[dim]No recommendations for this category[/dim]")
            return

        self._render_shortage_table(summary.get("shortages", []))

    def _render_shortage_table(self, shortages: list[dict], show_category: bool = False) -> None:
        if not shortages:
            self.console.print("[green]Nothing missing[/green]")
            return

        table = Table(title="Shortages", show_header=True, header_style="bold")
        if show_category:
            table.add_column("Category", style="yellow")
        table.add_column("Item", style="cyan")
        table.add_column("Have", justify="right")
        table.add_column("Need", justify="right")
        table.add_column("Missing", justify="right", style="red")
        table.add_column("Unit")

        for shortage in shortages:
            row = [
                shortage["template_id"],
                _number(shortage["actual"]),
                _number(shortage["needed"]),
                _number(shortage["missing"]),
                _unit(shortage.get("unit")),
            ]
            if show_category:
                row.insert(0, shortage.get("category_id", ""))
            table.add_row(*row)

        self.console.print(table)

    def _render_items(self, data: dict) -> None:
        """Render inventory items with their status."""
        items = data["data"]["items"]

        if not items:
            self.console.print("[dim]No items in inventory[/dim]")
            return

        table = Table(title="Inventory", show_header=True, header_style="bold cyan")
        table.add_column("Item", style="cyan")
        table.add_column("Category", style="yellow")
        table.add_column("Qty", justify="right")
        table.add_column("Target", justify="right")
        table.add_column("Status")
        table.add_column("Missing", justify="right", style="red")
        table.add_column("Expires")

        for item in items:
            if item.get("never_expires"):
                expires = "never"
            elif item.get("expiration_date"):
                expires = str(item["expiration_date"])
            else:
                expires = "-"
            table.add_row(
                item.get("name") or "-",
                item["category_id"],
                f"{_number(item['quantity'])} {_unit(item.get('unit'))}".strip(),
                _number(item.get("target_quantity")),
                _status(item["status"]),
                _number(item.get("missing")) if item.get("missing") else "",
                expires,
            )

        self.console.print(table)

    def _render_recommendations(self, data: dict) -> None:
        """Render recommended quantities."""
        recommendations = data["data"]["recommendations"]

        if not recommendations:
            self.console.print("[dim]No recommendations apply to this household[/dim]")
            return

        table = Table(title="Recommended Supplies", show_header=True, header_style="bold cyan")
        table.add_column("Item", style="cyan")
        table.add_column("Category", style="yellow")
        table.add_column("Quantity", justify="right")
        table.add_column("Unit")

        for rec in recommendations:
            table.add_row(
                rec["template_id"],
                rec["category_id"],
                str(rec["quantity"]),
                _unit(rec.get("unit")),
            )

        self.console.print(table)

    def _render_shortages(self, data: dict) -> None:
        """Render shortages across categories."""
        self._render_shortage_table(data["data"]["shortages"], show_category=True)

    def _render_alerts(self, data: dict) -> None:
        """Render alerts, most urgent first."""
        alerts = data["data"]["alerts"]

        if not alerts:
            self.console.print("[green]No alerts[/green]")
            return

        table = Table(title="Alerts", show_header=True, header_style="bold")
        table.add_column("Severity")
        table.add_column("Subject", style="cyan")
        table.add_column("Problem")

        for alert in alerts:
            table.add_row(
                _status(alert["severity"]),
                alert.get("item_name") or alert.get("category_id") or "water",
                _alert_message(alert),
            )

        self.console.print(table)

        counts = data["data"].get("counts")
        if counts:
            self.console.print(
                f"[red]{counts['critical']} critical[/red], "
                f"[yellow]{counts['warning']} warning[/yellow], "
                f"{counts['info']} info"
            )

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {message}")

