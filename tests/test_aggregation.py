from __future__ import annotations

import math

import pytest

from aggregation import (
    analyze,
    bias_threshold,
    detect_bias,
    group_by_demographics,
    overall_average,
    passes_threshold,
    round_half_up,
)
from inference import enrich_resumes
from models import UNKNOWN, DemographicGroup, EnrichedResume
from sample_data import SAMPLE_RESUMES


def _resume(gender: str, race: str, score: float, rid: str = "r") -> EnrichedResume:
    return EnrichedResume(
        resume_id=rid,
        text="text",
        match_score=score,
        inferred_gender=gender,
        inferred_race=race,
        gender_confidence=0.85,
        race_confidence=0.6,
    )


def _groups(*means: float) -> list[DemographicGroup]:
    return [DemographicGroup(demographic=f"G{i}", count=1, mean_score=m) for i, m in enumerate(means)]


# ---------------------------------------------------------------------------
# Grouping
# ---------------------------------------------------------------------------


def test_groups_by_gender_and_race_and_ranks_by_mean() -> None:
    resumes = [
        _resume("Male", "White", 80),
        _resume("Female", "Asian", 90),
        _resume("Male", "White", 70),
        _resume("Female", "Asian", 94),
    ]
    groups = group_by_demographics(resumes)

    assert groups == [
        DemographicGroup("Female - Asian", 2, 92.0),
        DemographicGroup("Male - White", 2, 75.0),
    ]


def test_unknown_gender_or_race_is_excluded() -> None:
    resumes = [
        _resume("Male", "White", 80),
        _resume(UNKNOWN, "White", 10),
        _resume("Female", UNKNOWN, 10),
        _resume(UNKNOWN, UNKNOWN, 10),
    ]
    groups = group_by_demographics(resumes)

    assert [g.demographic for g in groups] == ["Male - White"]
    assert sum(g.count for g in groups) == 1 < len(resumes)


def test_group_counts_cover_every_known_resume() -> None:
    resumes = [_resume("Male", "Black", 60 + i) for i in range(5)] + [_resume("Female", "Hispanic", 70)]
    groups = group_by_demographics(resumes)
    assert sum(g.count for g in groups) == len(resumes)
    assert all(g.count >= 1 for g in groups)


def test_empty_and_all_unknown_inputs_yield_no_groups() -> None:
    assert group_by_demographics([]) == []
    assert group_by_demographics([_resume(UNKNOWN, "White", 80), _resume("Male", UNKNOWN, 80)]) == []


def test_group_mean_is_rounded_to_two_places() -> None:
    groups = group_by_demographics([_resume("Male", "Asian", s) for s in (70, 71, 71)])
    assert groups[0].mean_score == 70.67


def test_equal_means_keep_first_seen_order() -> None:
    resumes = [_resume("Male", "White", 80), _resume("Female", "Black", 80), _resume("Male", "Asian", 90)]
    assert [g.demographic for g in group_by_demographics(resumes)] == [
        "Male - Asian",
        "Male - White",
        "Female - Black",
    ]


@pytest.mark.parametrize("value,expected", [
    (62.125, 62.13),   # Python's round() would give 62.12
    (0.125, 0.13),
    (70.666, 70.67),
    (83.5, 83.5),
])
def test_round_half_up(value: float, expected: float) -> None:
    assert round_half_up(value) == expected


# ---------------------------------------------------------------------------
# Bias detection
# ---------------------------------------------------------------------------


def test_bias_when_a_group_is_below_eighty_percent_of_top() -> None:
    assert detect_bias(_groups(90, 70)) is True  # 70 < 72


def test_no_bias_when_all_groups_clear_threshold() -> None:
    assert detect_bias(_groups(90, 75)) is False  # 75 >= 72


def test_group_exactly_at_threshold_passes() -> None:
    assert detect_bias(_groups(90, 72)) is False


@pytest.mark.parametrize("mean", [0, 10, 99.9])
def test_single_group_never_flags_bias(mean: float) -> None:
    assert detect_bias(_groups(mean)) is False


def test_no_groups_never_flags_bias() -> None:
    assert detect_bias([]) is False
    assert bias_threshold([]) is None


def test_passes_threshold_per_group() -> None:
    groups = _groups(90, 75, 70)
    assert [passes_threshold(g, groups) for g in groups] == [True, True, False]


def test_overall_average_is_mean_of_group_means() -> None:
    assert overall_average(_groups(90, 70, 71)) == 77.0
    assert overall_average([]) == 0.0


# ---------------------------------------------------------------------------
# End-to-end on the built-in sample batch
# ---------------------------------------------------------------------------


def test_sample_batch_flags_bias_against_black_women() -> None:
    enriched = enrich_resumes(SAMPLE_RESUMES)
    by_name = {r.name: r for r in enriched}

    for name in ("Keisha Washington", "Aisha Jackson"):
        assert by_name[name].inferred_gender == "Female"
        assert by_name[name].inferred_race == "Black"
        assert by_name[name].gender_confidence == 0.75  # from communal wording

    analysis = analyze(enriched)
    means = {g.demographic: g.mean_score for g in analysis.groups}

    assert analysis.bias_detected is True
    assert analysis.total_resumes == 10
    assert means["Female - Black"] == 62.5
    assert analysis.groups[0] == DemographicGroup("Male - Black", 2, 91.5)
    assert analysis.groups[-1].demographic == "Female - Black"
    assert len(analysis.groups) == 7
    assert analysis.overall_average == 84.5


def test_sample_batch_without_black_women_has_no_bias() -> None:
    kept = [r for r in SAMPLE_RESUMES if r.name not in ("Keisha Washington", "Aisha Jackson")]
    analysis = analyze(enrich_resumes(kept))

    assert "Female - Black" not in {g.demographic for g in analysis.groups}
    assert analysis.bias_detected is False


def test_round_half_up_passes_non_finite_values_through() -> None:
    assert round_half_up(math.inf) == math.inf
    assert round_half_up(1e307) == 1e307
    assert math.isnan(round_half_up(math.nan))


def test_infinite_score_still_produces_an_analysis() -> None:
    analysis = analyze([_resume("Male", "White", math.inf), _resume("Female", "Hispanic", 80)])

    assert analysis.groups[0] == DemographicGroup("Male - White", 1, math.inf)
    assert analysis.bias_detected is True
    assert analysis.overall_average == math.inf
