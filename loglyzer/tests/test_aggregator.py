"""
Tests for the statistics aggregator.
"""

from datetime import datetime

import pytest

from loglyzer.models.stats import ErrorFrequency
from loglyzer.nodes.aggregator import analyze_logs

from loglyzer.tests.sample_logs import entry


class TestAnalyzeLogs:
    """Tests for analyze_logs function."""

    def test_counts_levels_and_top(self):
        entries = [
            entry("2024-01-15 10:30:45 [ERROR] API timeout"),
            entry("2024-01-15 10:31:45 [ERROR] API timeout"),
            entry("2024-01-15 10:32:45 [INFO] OK"),
            entry("2024-01-15 10:33:45 [WARNING] High CPU"),
        ]

        stats = analyze_logs(entries, 3)

        assert stats.total_entries == 4
        assert stats.by_level == {"ERROR": 2, "INFO": 1, "WARNING": 1}
        assert stats.top_errors[0] == ErrorFrequency(message="API timeout", count=2)
        assert len(stats.top_errors) == 1

    def test_level_sum_matches_total(self):
        entries = [
            entry("2024-01-15 10:30:45 [ERROR] a"),
            entry("2024-01-15 10:31:45 [DEBUG] b"),
            entry("2024-01-15 11:32:45 [INFO] c"),
            entry("2024-01-15 12:33:45 [WARN] d"),
            entry("2024-01-15 12:34:45 [INFO] e"),
        ]

        stats = analyze_logs(entries, 5)

        assert sum(stats.by_level.values()) == stats.total_entries
        assert "DEBUG" in stats.by_level

    def test_only_observed_levels(self):
        stats = analyze_logs([entry("2024-01-15 10:30:45 [INFO] only info")], 5)

        assert stats.by_level == {"INFO": 1}
        assert stats.top_errors == []
        assert stats.errors_by_hour == {}
        assert stats.error_rate_by_hour == {}

    def test_errors_by_hour_and_rate(self):
        entries = [
            entry("2024-01-15 10:05:00 [ERROR] first"),
            entry("2024-01-15 10:55:00 [ERROR] second"),
            entry("2024-01-15 14:00:00 [ERROR] third"),
            entry("2024-01-15 14:10:00 [INFO] fine"),
        ]

        stats = analyze_logs(entries, 5)

        assert stats.errors_by_hour == {"10:00": 2, "14:00": 1}
        assert set(stats.error_rate_by_hour) == set(stats.errors_by_hour)
        for hour, count in stats.errors_by_hour.items():
            assert stats.error_rate_by_hour[hour] == pytest.approx(count / 4 * 100)
        assert stats.error_rate_by_hour["10:00"] == pytest.approx(50.0)

    def test_hour_buckets_ignore_date(self):
        entries = [
            entry("2024-01-15 09:00:00 [ERROR] monday"),
            entry("2024-01-16 09:59:59 [ERROR] tuesday"),
        ]

        stats = analyze_logs(entries, 5)

        assert stats.errors_by_hour == {"09:00": 2}

    def test_hours_are_sorted(self):
        entries = [
            entry("2024-01-15 23:00:00 [ERROR] late"),
            entry("2024-01-15 01:00:00 [ERROR] early"),
        ]

        stats = analyze_logs(entries, 5)

        assert list(stats.errors_by_hour) == ["01:00", "23:00"]

    def test_ranking_descending_with_first_seen_ties(self):
        entries = [
            entry("2024-01-15 10:00:00 [ERROR] beta"),
            entry("2024-01-15 10:00:01 [ERROR] alpha"),
            entry("2024-01-15 10:00:02 [ERROR] gamma"),
            entry("2024-01-15 10:00:03 [ERROR] gamma"),
            entry("2024-01-15 10:00:04 [ERROR] alpha"),
            entry("2024-01-15 10:00:05 [ERROR] beta"),
            entry("2024-01-15 10:00:06 [ERROR] delta"),
            entry("2024-01-15 10:00:07 [ERROR] gamma"),
        ]

        stats = analyze_logs(entries, 10)

        assert [(e.message, e.count) for e in stats.top_errors] == [
            ("gamma", 3),
            ("beta", 2),
            ("alpha", 2),
            ("delta", 1),
        ]

    def test_top_n_truncates(self):
        entries = [entry(f"2024-01-15 10:00:0{i} [ERROR] message {i}") for i in range(5)]

        stats = analyze_logs(entries, 2)

        assert [e.message for e in stats.top_errors] == ["message 0", "message 1"]

    @pytest.mark.parametrize("top_n", [0, -3])
    def test_top_n_below_one_is_clamped(self, top_n):
        entries = [
            entry("2024-01-15 10:00:00 [ERROR] one"),
            entry("2024-01-15 10:00:01 [ERROR] two"),
        ]

        stats = analyze_logs(entries, top_n)

        assert len(stats.top_errors) == 1

    def test_single_entry(self):
        stats = analyze_logs([entry("2024-01-15 10:00:00 [ERROR] alone")], 1)

        assert stats.total_entries == 1
        assert stats.error_rate_by_hour == {"10:00": 100.0}

    def test_empty_batch_has_no_rates(self):
        stats = analyze_logs([], 5)

        assert stats.total_entries == 0
        assert stats.by_level == {}
        assert stats.error_rate_by_hour == {}

    def test_echoes_bounds_and_skipped(self):
        stats = analyze_logs(
            [entry("2024-01-15 10:00:00 [INFO] x")],
            5,
            since=datetime(2024, 1, 15, 9, 0, 0),
            until=None,
            skipped=7,
        )

        assert stats.since == "2024-01-15 09:00:00"
        assert stats.until is None
        assert stats.skipped_lines == 7

    def test_level_percentage(self):
        entries = [
            entry("2024-01-15 10:00:00 [ERROR] x"),
            entry("2024-01-15 10:00:00 [INFO] y"),
            entry("2024-01-15 10:00:00 [INFO] z"),
            entry("2024-01-15 10:00:00 [INFO] w"),
        ]

        stats = analyze_logs(entries, 5)

        assert stats.level_percentage("ERROR") == pytest.approx(25.0)
        assert stats.level_percentage("DEBUG") == 0.0
        assert stats.error_count == 1
