from __future__ import annotations

import pytest

from models import FEMALE, MALE, UNKNOWN, Inference
from text_classifier import classify_gender_by_text, count_occurrences


@pytest.mark.parametrize("text", [
    "",
    "Software engineer with Python experience.",
    "Data analyst. SQL, Excel, Tableau.",
])
def test_text_without_coded_words_is_unknown(text: str) -> None:
    assert classify_gender_by_text(text) == Inference(UNKNOWN, 0.0)


def test_none_text_is_unknown() -> None:
    assert classify_gender_by_text(None) == Inference(UNKNOWN, 0.0)  # type: ignore[arg-type]


def test_ratio_exactly_point_six_is_unknown() -> None:
    """3 agentic vs 2 communal: the upper bound is exclusive."""
    text = "Achieved goals, delivered results, executed plans, helped peers, assisted clients."
    assert classify_gender_by_text(text) == Inference(UNKNOWN, 0.0)


def test_ratio_exactly_point_four_is_unknown() -> None:
    """2 agentic vs 3 communal: the lower bound is exclusive."""
    text = "Achieved goals, delivered results, helped peers, assisted clients, coordinated events."
    assert classify_gender_by_text(text) == Inference(UNKNOWN, 0.0)


def test_mostly_agentic_text_is_male_capped_at_075() -> None:
    assert classify_gender_by_text("Achieved, delivered and executed.") == Inference(MALE, 0.75)


def test_male_confidence_is_ratio_below_cap() -> None:
    result = classify_gender_by_text("Achieved targets, delivered products, helped onboarding.")
    assert result.label == MALE
    assert result.confidence == pytest.approx(2 / 3)


def test_mostly_communal_text_is_female_capped_at_075() -> None:
    assert classify_gender_by_text("Helped and assisted the team.") == Inference(FEMALE, 0.75)


def test_female_confidence_is_one_minus_ratio_below_cap() -> None:
    result = classify_gender_by_text("Achieved a launch, helped users, assisted support.")
    assert result.label == FEMALE
    assert result.confidence == pytest.approx(2 / 3)


def test_matching_is_case_insensitive() -> None:
    assert classify_gender_by_text("ACHIEVED EVERYTHING").label == MALE


def test_words_count_inside_longer_words() -> None:
    """'led' is found inside 'skilled'."""
    assert count_occurrences("skilled and fulfilled", ("led",)) == 2
    assert classify_gender_by_text("Skilled engineer") == Inference(MALE, 0.75)


def test_repeated_words_are_each_counted() -> None:
    assert count_occurrences("led, led and led again", ("led",)) == 3
    # 3 agentic vs 1 communal -> 0.75
    assert classify_gender_by_text("led, led and led; helped once") == Inference(MALE, 0.75)
