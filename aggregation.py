"""Demographic grouping and the 80%-rule (four-fifths) bias check."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from models import BiasAnalysis, DemographicGroup, EnrichedResume

LOGGER = logging.getLogger(__name__)

DISPARATE_IMPACT_RATIO = 0.8


def round_half_up(value: float, places: int = 2) -> float:
    """Round like a spreadsheet (2.345 -> 2.35), not banker's rounding."""
    factor = 10 ** places
    scaled = value * factor
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def group_by_demographics(resumes: Iterable[EnrichedResume]) -> list[DemographicGroup]:
    """Bucket by ``"{gender} - {race}"`` and rank buckets by mean score, best first.

    Resumes with an Unknown gender or race are left out. Buckets with equal
    means keep first-seen order.
    """
    buckets: dict[str, list[float]] = {}
    for resume in resumes:
        key = resume.demographic_key
        if key is None:
            continue
        buckets.setdefault(key, []).append(resume.match_score)

    groups = [
        DemographicGroup(demographic=key, count=len(scores), mean_score=round_half_up(sum(scores) / len(scores)))
        for key, scores in buckets.items()
    ]
    groups.sort(key=lambda g: g.mean_score, reverse=True)
    return groups


def bias_threshold(groups: Sequence[DemographicGroup]) -> float | None:
    """80% of the top group's mean, or None when there are no groups."""
    if not groups:
        return None
    return groups[0].mean_score * DISPARATE_IMPACT_RATIO


def passes_threshold(group: DemographicGroup, groups: Sequence[DemographicGroup]) -> bool:
    threshold = bias_threshold(groups)
    return threshold is None or group.mean_score >= threshold


def detect_bias(groups: Sequence[DemographicGroup]) -> bool:
    """True when any group's mean falls below 80% of the best group's mean.

    ``groups`` must already be ranked (see group_by_demographics). Fewer than
    two groups never counts as bias.
    """
    if len(groups) < 2:
        return False
    threshold = bias_threshold(groups)
    return any(group.mean_score < threshold for group in groups)


def overall_average(groups: Sequence[DemographicGroup]) -> float:
    """Unweighted mean of the group means; 0 when there are no groups."""
    if not groups:
        return 0.0
    return round_half_up(sum(g.mean_score for g in groups) / len(groups))


def analyze(resumes: Sequence[EnrichedResume]) -> BiasAnalysis:
    """Run grouping and the bias check over one enriched batch."""
    groups = group_by_demographics(resumes)
    biased = detect_bias(groups)
    LOGGER.info(
        "Bias analysis: resumes=%s groups=%s bias_detected=%s",
        len(resumes),
        len(groups),
        biased,
    )
    return BiasAnalysis(
        groups=tuple(groups),
        bias_detected=biased,
        total_resumes=len(resumes),
        overall_average=overall_average(groups),
    )
