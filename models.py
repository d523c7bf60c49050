"""Shared typed models for the resume bias pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

UNKNOWN = "Unknown"

MALE = "Male"
FEMALE = "Female"
GENDERS: tuple[str, ...] = (MALE, FEMALE, UNKNOWN)

HISPANIC = "Hispanic"
BLACK = "Black"
ASIAN = "Asian"
WHITE = "White"
RACES: tuple[str, ...] = (HISPANIC, BLACK, ASIAN, WHITE, UNKNOWN)


class Inference(NamedTuple):
    """A single classifier verdict: label plus confidence in [0, 1]."""
    label: str
    confidence: float


UNKNOWN_INFERENCE = Inference(UNKNOWN, 0.0)


@dataclass(frozen=True, slots=True)
class ResumeRecord:
    """Normalized resume row produced by the normalizer, one per input row."""

    resume_id: str
    text: str
    match_score: float
    name: str | None = None


@dataclass(frozen=True, slots=True)
class EnrichedResume:
    """A ResumeRecord plus the inferred demographic labels."""

    resume_id: str
    text: str
    match_score: float
    inferred_gender: str
    inferred_race: str
    gender_confidence: float
    race_confidence: float
    name: str | None = None

    @property
    def demographic_key(self) -> str | None:
        """Group key ``"{gender} - {race}"``, or None when either label is unknown."""
        if self.inferred_gender == UNKNOWN or self.inferred_race == UNKNOWN:
            return None
        return f"{self.inferred_gender} - {self.inferred_race}"


@dataclass(frozen=True, slots=True)
class DemographicGroup:
    demographic: str
    count: int
    mean_score: float


@dataclass(frozen=True, slots=True)
class BiasAnalysis:
    """Ranked groups plus the 80%-rule verdict for one batch."""

    groups: tuple[DemographicGroup, ...]
    bias_detected: bool
    total_resumes: int
    overall_average: float = field(default=0.0)
