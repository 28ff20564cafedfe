"""Tests for cadence normalization to occurrences per month."""

import pytest

from adpackage.metrics.cadence import (
    CADENCE_TO_MONTHLY,
    DEFAULT_OCCURRENCES_PER_MONTH,
    WEEKS_PER_MONTH,
    merge_cadence_table,
    occurrences_per_month,
)


class TestOccurrencesPerMonth:
    """Tests for the cadence lookup."""

    @pytest.mark.parametrize(
        ("cadence", "expected"),
        [
            ("daily", 30),
            ("daily-business", 22),
            ("weekdays", 22),
            ("weekly", 4.33),
            ("bi-weekly", 2.17),
            ("monthly", 1),
            ("quarterly", 0.33),
            ("annual", 0.083),
            ("bi-annually", 0.167),
            ("irregular", 2),
        ],
        ids=[
            "daily",
            "daily_business",
            "weekdays",
            "weekly",
            "bi_weekly",
            "monthly",
            "quarterly",
            "annual",
            "bi_annually",
            "irregular",
        ],
    )
    def test_declared_cadence_maps_to_exact_rate(self, cadence: str, expected: float) -> None:
        assert occurrences_per_month(cadence) == expected

    @pytest.mark.parametrize(
        ("cadence", "days_per_week"),
        [
            ("weekdays-plus-saturday", 26),
            ("weekdays-plus-sunday", 26),
            ("weekend-only", 8),
            ("saturdays", 4),
            ("sundays", 4),
        ],
    )
    def test_broadcast_schedules_are_scaled_by_weeks_per_month(
        self, cadence: str, days_per_week: int
    ) -> None:
        assert occurrences_per_month(cadence) == pytest.approx(days_per_week / WEEKS_PER_MONTH)

    @pytest.mark.parametrize(
        "cadence",
        [None, "", "fortnightly-ish", "hourly", 42],
        ids=["none", "empty", "unknown", "hourly", "non_string"],
    )
    def test_missing_or_unknown_cadence_defaults_to_one(self, cadence: object) -> None:
        assert occurrences_per_month(cadence) == DEFAULT_OCCURRENCES_PER_MONTH  # type: ignore[arg-type]

    def test_lookup_is_case_insensitive_and_trims(self) -> None:
        assert occurrences_per_month("  Weekly ") == 4.33
        assert occurrences_per_month("DAILY-BUSINESS") == 22

    def test_returns_float(self) -> None:
        assert isinstance(occurrences_per_month("daily"), float)

    def test_unknown_cadence_is_logged(self, _captured_logs: list[dict]) -> None:
        occurrences_per_month("every-other-tuesday")
        assert any(entry["event"] == "cadence_unrecognized" for entry in _captured_logs)

    def test_custom_table_replaces_defaults(self) -> None:
        table = {"semi-weekly": 8.66}
        assert occurrences_per_month("semi-weekly", table) == 8.66
        assert occurrences_per_month("daily", table) == DEFAULT_OCCURRENCES_PER_MONTH


class TestMergeCadenceTable:
    """Tests for layering cadence overrides on the default table."""

    def test_overrides_replace_and_extend(self) -> None:
        table = merge_cadence_table({"Weekly": 4.0, "semi-weekly": 8.66})
        assert table["weekly"] == 4.0
        assert table["semi-weekly"] == 8.66
        assert table["daily"] == 30

    def test_no_overrides_copies_defaults(self) -> None:
        table = merge_cadence_table(None)
        assert table == CADENCE_TO_MONTHLY
        assert table is not CADENCE_TO_MONTHLY

    def test_defaults_are_not_mutated(self) -> None:
        merge_cadence_table({"weekly": 5.0})
        assert CADENCE_TO_MONTHLY["weekly"] == WEEKS_PER_MONTH
