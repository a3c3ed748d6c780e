"""Tests for output formatting."""

import json
from datetime import date
from uuid import UUID

from supply_tracker.models import ItemStatus, Unit
from supply_tracker.output_formatter import JSONEncoder, OutputFormatter


class TestJSONEncoder:
    """Tests for JSONEncoder."""

    def test_encodes_domain_types(self):
        payload = {
            "id": UUID("12345678-1234-5678-1234-567812345678"),
            "expires": date(2026, 3, 1),
            "status": ItemStatus.WARNING,
            "unit": Unit.LITERS,
            "ids": frozenset({"b", "a"}),
        }
        decoded = json.loads(json.dumps(payload, cls=JSONEncoder))
        assert decoded == {
            "id": "12345678-1234-5678-1234-567812345678",
            "expires": "2026-03-01",
            "status": "warning",
            "unit": "liters",
            "ids": ["a", "b"],
        }


class TestOutputFormatter:
    """Tests for OutputFormatter."""

    def test_json_output(self, capsys):
        formatter = OutputFormatter(json_mode=True)
        formatter.output({"success": True, "data": {"shortages": []}})
        data = json.loads(capsys.readouterr().out)
        assert data == {"success": True, "data": {"shortages": []}}

    def test_json_error(self, capsys):
        formatter = OutputFormatter(json_mode=True)
        formatter.error("Unknown category: garden", error_code="UNKNOWN_CATEGORY")
        data = json.loads(capsys.readouterr().out)
        assert data["success"] is False
        assert data["error_code"] == "UNKNOWN_CATEGORY"

    def test_rich_error(self, capsys):
        OutputFormatter().error("boom")
        assert "boom" in capsys.readouterr().out

    def test_rich_empty_shortages(self, capsys):
        OutputFormatter().output({"success": True, "data": {"shortages": []}})
        assert "Nothing missing" in capsys.readouterr().out

    def test_rich_items(self, capsys):
        OutputFormatter().output(
            {
                "success": True,
                "data": {
                    "items": [
                        {
                            "name": "Rope",
                            "category_id": "tools-supplies",
                            "quantity": 4.0,
                            "unit": Unit.METERS,
                            "target_quantity": 10,
                            "status": ItemStatus.WARNING,
                            "missing": 6.0,
                            "never_expires": True,
                        }
                    ]
                },
            }
        )
        out = capsys.readouterr().out
        assert "Rope" in out
        assert "never" in out

    def test_rich_recommendations(self, capsys):
        OutputFormatter().output(
            {
                "success": True,
                "data": {
                    "recommendations": [
                        {"template_id": "rope", "category_id": "tools-supplies",
                         "quantity": 10, "unit": Unit.METERS}
                    ]
                },
            }
        )
        out = capsys.readouterr().out
        assert "rope" in out
        assert "meters" in out

    def test_rich_alerts(self, capsys):
        OutputFormatter().output(
            {
                "success": True,
                "data": {
                    "alerts": [
                        {"id": "expired-1", "severity": "critical", "kind": "expired",
                         "item_name": "Old soup", "days": -3},
                        {"id": "category-low-stock-tools-supplies", "severity": "warning",
                         "kind": "low_stock", "category_id": "tools-supplies", "percentage": 33.0},
                        {"id": "water-shortage-preparation", "severity": "warning",
                         "kind": "water_shortage", "liters": 2.3},
                    ],
                    "counts": {"critical": 1, "warning": 2, "info": 0, "total": 3},
                },
            }
        )
        out = capsys.readouterr().out
        assert "Old soup" in out
        assert "Running low (33%" in out
        assert "2.3 L" in out
        assert "1 critical" in out

    def test_rich_no_alerts(self, capsys):
        OutputFormatter().output(
            {"success": True, "data": {"alerts": [], "counts": {"critical": 0, "warning": 0,
                                                               "info": 0, "total": 0}}}
        )
        assert "No alerts" in capsys.readouterr().out

    def test_rich_message(self, capsys):
        OutputFormatter().output({"success": True, "data": {}}, "Overall preparedness: 40%")
        assert "Overall preparedness: 40%" in capsys.readouterr().out
