"""Tests for category preparedness scoring."""

import math
from datetime import timedelta

import pytest

from supply_tracker.category_scorer import (
    clamp_percentage,
    completion_percentage,
    overall_preparedness,
    score_all_categories,
    score_category,
    target_for_template,
)
from supply_tracker.catalog import STANDARD_CATEGORIES, get_template
from supply_tracker.models import CategoryStatusSummary, HouseholdConfig, ItemStatus, Unit


def _score(category_id, items, household, templates, as_of, **kwargs):
    return score_category(category_id, items, household, templates, as_of=as_of, **kwargs)


class TestPercentages:
    """Tests for percentage helpers."""

    def test_clamp(self):
        assert clamp_percentage(150) == 100
        assert clamp_percentage(-5) == 0
        assert clamp_percentage(float("nan")) == 0
        assert clamp_percentage(float("inf")) == 0

    def test_nothing_needed_is_complete(self):
        assert completion_percentage(0, 0) == 100

    def test_ratio(self):
        assert completion_percentage(3, 12) == 25

    @pytest.mark.parametrize(
        "actual,needed",
        [
            (float("nan"), 10),
            (float("inf"), 10),
            (float("-inf"), 10),
            (5, float("nan")),
            (5, float("inf")),
            (float("nan"), float("nan")),
        ],
    )
    def test_non_finite_inputs_stay_in_range(self, actual, needed):
        result = completion_percentage(actual, needed)
        assert math.isfinite(result)
        assert 0 <= result <= 100


class TestScoreCategory:
    """Tests for score_category."""

    def test_partial_water_supply(self, make_item, single_adult, templates, as_of):
        water = make_item(
            category_id="water-beverages", item_type="bottled-water", quantity=9,
            unit=Unit.LITERS, never_expires=True,
        )
        summary = _score("water-beverages", [water], single_adult, templates, as_of)

        # bottled water 9 + milk 2 + juice 1
        assert summary.total_needed == 12
        assert summary.total_actual == 9
        assert summary.completion_percentage == 75
        assert summary.status == ItemStatus.OK
        assert [s.template_id for s in summary.shortages] == ["long-life-milk", "long-life-juice"]
        assert summary.shortages[0].missing == 2
        assert summary.fulfilled_item_types == 1
        assert summary.total_item_types == 3
        assert summary.primary_unit == Unit.LITERS
        assert summary.drinking_water_needed == 9
        assert summary.preparation_water_needed == 0

    def test_empty_category_is_critical(self, single_adult, templates, as_of):
        summary = _score("tools-supplies", [], single_adult, templates, as_of)
        assert summary.completion_percentage == 0
        assert summary.status == ItemStatus.CRITICAL
        assert [s.template_id for s in summary.shortages] == ["rope", "duct-tape", "whistle"]
        assert summary.item_count == 0

    def test_pets_excluded_without_pets(self, single_adult, templates, as_of):
        summary = _score("pets", [], single_adult, templates, as_of)
        assert summary.total_needed == 0
        assert summary.completion_percentage == 100
        assert summary.status == ItemStatus.OK
        assert summary.shortages == []
        assert summary.total_item_types == 0

    def test_pets_counted_with_pets(self, templates, as_of):
        household = HouseholdConfig(adults=1, pets=1, supply_duration_days=3)
        summary = _score("pets", [], household, templates, as_of)
        # pet food in kg, pet water in liters, carrier in pieces: one share each
        assert summary.total_needed == 3
        assert summary.primary_unit is None
        assert summary.status == ItemStatus.CRITICAL

    def test_overstock_counts_once_across_units(self, make_item, single_adult, templates, as_of):
        rope = make_item(item_type="rope", quantity=100, never_expires=True)
        summary = _score("tools-supplies", [rope], single_adult, templates, as_of)
        # meters, rolls and pieces: rope alone fills one of three shares
        assert summary.total_needed == 3
        assert summary.total_actual == 1
        assert abs(summary.completion_percentage - 100 / 3) < 1e-9
        assert summary.status == ItemStatus.WARNING
        assert summary.primary_unit is None
        assert [s.template_id for s in summary.shortages] == ["duct-tape", "whistle"]

    def test_item_status_counts(self, make_item, single_adult, templates, as_of):
        items = [
            make_item(item_type="rope", quantity=4, never_expires=True),
            make_item(item_type="duct-tape", quantity=1, never_expires=True),
            make_item(item_type="whistle", quantity=1, expiration_date=as_of - timedelta(days=1)),
            make_item(name="Crowbar", item_type="custom", quantity=1),
        ]
        summary = _score("tools-supplies", items, single_adult, templates, as_of)
        assert summary.item_count == 4
        assert summary.warning_count == 1
        assert summary.critical_count == 1
        assert summary.ok_count == 2
        assert summary.primary_unit is None

    def test_expired_items_do_not_add_shortage(self, make_item, single_adult, templates, as_of):
        whistle = make_item(item_type="whistle", quantity=0, expiration_date=as_of - timedelta(days=1))
        summary = _score("tools-supplies", [whistle], single_adult, templates, as_of)
        assert "whistle" not in [s.template_id for s in summary.shortages]

    def test_marked_as_enough_fulfils(self, make_item, single_adult, templates, as_of):
        tape = make_item(item_type="duct-tape", quantity=0, marked_as_enough=True)
        summary = _score("tools-supplies", [tape], single_adult, templates, as_of)
        assert "duct-tape" not in [s.template_id for s in summary.shortages]
        assert summary.fulfilled_item_types == 1

    def test_disabled_template(self, single_adult, templates, as_of):
        summary = _score(
            "water-beverages", [], single_adult, templates, as_of,
            disabled_template_ids={"long-life-juice"},
        )
        assert summary.total_needed == 11
        assert [s.template_id for s in summary.shortages] == ["bottled-water", "long-life-milk"]

    def test_freezer_items_skipped(self, single_adult, templates, as_of):
        summary = _score("food", [], single_adult, templates, as_of)
        assert "frozen-vegetables" not in [s.template_id for s in summary.shortages]

    def test_unknown_category(self, single_adult, templates, as_of):
        summary = _score("garden", [], single_adult, templates, as_of)
        assert summary.has_recommendations is False
        assert summary.completion_percentage == 100
        assert summary.primary_unit is None

    def test_food_calories(self, make_item, single_adult, templates, as_of):
        items = [
            make_item(category_id="food", item_type="canned-fish", quantity=2, unit=Unit.CANS,
                      never_expires=True),
            make_item(category_id="food", item_type="pasta", quantity=1, unit=Unit.KILOGRAMS,
                      never_expires=True),
        ]
        summary = _score("food", items, single_adult, templates, as_of)
        # 2 cans * 300 kcal + 1 kg of 500 g packs * 1800 kcal
        assert summary.total_actual_calories == 4200
        assert summary.total_needed_calories == 6000
        assert summary.missing_calories == 1800
        assert summary.drinking_water_needed is None

    def test_food_completion_follows_calories(self, make_item, single_adult, templates, as_of):
        rice = make_item(category_id="food", item_type="rice", quantity=1, unit=Unit.KILOGRAMS,
                         never_expires=True)
        summary = _score("food", [rice], single_adult, templates, as_of)
        # 3500 of 6000 kcal
        assert summary.total_actual_calories == 3500
        assert abs(summary.completion_percentage - 3500 / 6000 * 100) < 1e-9
        assert summary.status == ItemStatus.WARNING

    def test_empty_food_is_critical(self, single_adult, templates, as_of):
        summary = _score("food", [], single_adult, templates, as_of)
        assert summary.completion_percentage == 0
        assert summary.status == ItemStatus.CRITICAL

    def test_communication_counts_fulfilled_types(self, make_item, single_adult, templates, as_of):
        radio = make_item(category_id="communication-info", item_type="battery-radio",
                          quantity=3, never_expires=True)
        summary = _score("communication-info", [radio], single_adult, templates, as_of)
        assert summary.total_actual == 1
        assert summary.total_needed == 2
        assert summary.completion_percentage == 50
        assert summary.status == ItemStatus.WARNING
        assert summary.primary_unit is None
        assert [s.template_id for s in summary.shortages] == ["hand-crank-radio"]

    def test_preparation_water_raises_bottled_water_target(
        self, make_item, single_adult, templates, as_of
    ):
        pasta = make_item(category_id="food", item_type="pasta", quantity=1, unit=Unit.KILOGRAMS)
        summary = _score("water-beverages", [pasta], single_adult, templates, as_of)
        assert summary.preparation_water_needed == 1
        assert target_for_template(get_template("bottled-water"), single_adult, [pasta], templates) == 10
        assert summary.total_needed == 13


class TestOverallPreparedness:
    """Tests for score_all_categories and overall_preparedness."""

    def test_disabled_categories_skipped(self, single_adult, templates, as_of):
        summaries = score_all_categories(
            STANDARD_CATEGORIES, [], single_adult, templates,
            disabled_category_ids={"pets", "food"}, as_of=as_of,
        )
        ids = [s.category_id for s in summaries]
        assert "pets" not in ids
        assert "food" not in ids
        assert ids[0] == "water-beverages"

    def test_share_of_ok_categories(self):
        summaries = [
            CategoryStatusSummary(category_id="a", status=ItemStatus.OK, completion_percentage=70),
            CategoryStatusSummary(category_id="b", status=ItemStatus.OK, completion_percentage=70),
            CategoryStatusSummary(category_id="c", status=ItemStatus.CRITICAL, completion_percentage=0),
        ]
        overview = overall_preparedness(summaries)
        assert overview.overall_percentage == 67
        assert overview.status == ItemStatus.WARNING
        assert len(overview.categories) == 3

    def test_warning_categories_do_not_count(self):
        summaries = [
            CategoryStatusSummary(category_id="a", status=ItemStatus.WARNING, completion_percentage=69),
            CategoryStatusSummary(category_id="b", status=ItemStatus.OK, completion_percentage=100),
        ]
        overview = overall_preparedness(summaries)
        assert overview.overall_percentage == 50
        assert overview.status == ItemStatus.WARNING

    def test_halves_round_up(self):
        summaries = [
            CategoryStatusSummary(
                category_id=f"c{i}",
                status=ItemStatus.OK if i == 0 else ItemStatus.CRITICAL,
                completion_percentage=0,
            )
            for i in range(8)
        ]
        assert overall_preparedness(summaries).overall_percentage == 13

    def test_all_ok(self):
        summaries = [
            CategoryStatusSummary(category_id="a", status=ItemStatus.OK, completion_percentage=80),
        ]
        overview = overall_preparedness(summaries)
        assert overview.overall_percentage == 100
        assert overview.status == ItemStatus.OK

    def test_no_categories(self):
        overview = overall_preparedness([])
        assert overview.overall_percentage == 0
        assert overview.status == ItemStatus.CRITICAL
