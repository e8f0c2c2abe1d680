"""Tests for chart statistics and VAS windows"""
import pytest

from trial_insights.ingest.schemas import TrialFilters, VasDataPoint
from trial_insights.query.aggregate import (
    adverse_event_frequency,
    age_group_distribution,
    dashboard_stats,
    filter_vas,
    gender_distribution,
    pga_distribution,
    treatment_distribution,
)
from trial_insights.query.filters import apply_filters


def test_simple_distributions(store):
    records = store.all()
    assert gender_distribution(records) == {"Male": 4, "Female": 4, "Other": 2}
    assert treatment_distribution(records) == {"Active Drug": 4, "Placebo": 3, "Comparator": 3}


def test_age_groups_follow_chart_order_and_skip_empty(store):
    placebo = apply_filters(store.all(), TrialFilters(treatment="Placebo"))
    dist = age_group_distribution(placebo)
    assert list(dist) == ["18-30", "31-45"]
    assert dist == {"18-30": 1, "31-45": 2}


def test_pga_distribution_sorted_by_score(store):
    assert pga_distribution(store.all()) == [(1, 1), (2, 3), (3, 2), (4, 3), (5, 1)]


def test_adverse_event_frequency_ranking(store):
    assert adverse_event_frequency(store.all()) == [
        ("Headache", 3),
        ("Dizziness", 2),
        ("Fatigue", 2),
        ("Nausea", 2),
        ("Rash", 2),
    ]
    assert adverse_event_frequency(store.all(), limit=2) == [("Headache", 3), ("Dizziness", 2)]


def test_dashboard_stats_on_empty_selection():
    stats = dashboard_stats([])
    assert stats["count"] == 0
    assert stats["gender"] == {}
    assert stats["adverse_events"] == []


def _points(*days):
    return [VasDataPoint(day=d, vas_score=50) for d in days]


def test_filter_vas_windows():
    points = _points(1, 7, 14, 21, 28)
    assert filter_vas(points, "all") == points
    assert [p.day for p in filter_vas(points, "7days")] == [28]
    assert [p.day for p in filter_vas(points, "14days")] == [21, 28]
    assert [p.day for p in filter_vas(points, "30days")] == [1, 7, 14, 21, 28]


def test_filter_vas_rejects_unknown_period():
    with pytest.raises(ValueError):
        filter_vas(_points(1), "90days")


def test_filter_vas_empty_series():
    assert filter_vas([], "7days") == []
