"""Tests for filter option extraction"""
from trial_insights.query import options


def test_center_options_sorted_unique(store):
    assert options.center_options(store.all()) == [
        "City Hospital",
        "General Clinic",
        "Rural Health Services",
        "University Medical Center",
    ]


def test_enumerated_options(store):
    assert options.gender_options(store.all()) == ["Female", "Male", "Other"]
    assert options.treatment_options(store.all()) == ["Active Drug", "Comparator", "Placebo"]
    assert options.age_group_options(store.all()) == ["18-30", "31-45", "46-60", "61+"]


def test_adverse_event_options_flatten_nested_events(store):
    assert options.adverse_event_options(store.all()) == [
        "Dizziness", "Fatigue", "Headache", "Nausea", "Rash",
    ]


def test_pga_scores_numeric_ascending(store):
    assert options.pga_score_options(store.all()) == [1, 2, 3, 4, 5]


def test_options_of_empty_collection():
    assert options.center_options([]) == []
    assert options.pga_score_options([]) == []
