"""Per-resume demographic inference: merges name and text classifier outputs."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from models import UNKNOWN_INFERENCE, EnrichedResume, Inference, ResumeRecord
from name_classifier import classify_gender_by_name, classify_race_by_surname
from text_classifier import classify_gender_by_text

LOGGER = logging.getLogger(__name__)

CONFIDENT = 0.5

ProgressCallback = Callable[[int, int], None]


class BatchCancelled(RuntimeError):
    """Raised when a caller cancels a batch before every record was enriched."""


def combine_gender(name_result: Inference, text_result: Inference) -> Inference:
    """Pick the gender call when both a name and resume text are available.

    Precedence: a confident name (> 0.5), then a confident text signal (> 0.5),
    then whichever is more confident. The name wins ties.
    """
    if name_result.confidence > CONFIDENT:
        return name_result
    if text_result.confidence > CONFIDENT:
        return text_result
    if text_result.confidence > name_result.confidence:
        return text_result
    return name_result


def infer_gender(record: ResumeRecord) -> Inference:
    if not record.name:
        return classify_gender_by_text(record.text)
    return combine_gender(classify_gender_by_name(record.name), classify_gender_by_text(record.text))


def infer_race(record: ResumeRecord) -> Inference:
    if not record.name:
        return UNKNOWN_INFERENCE
    return classify_race_by_surname(record.name)


def enrich_resume(record: ResumeRecord) -> EnrichedResume:
    """Attach inferred gender and race to one normalized record."""
    gender = infer_gender(record)
    race = infer_race(record)
    return EnrichedResume(
        resume_id=record.resume_id,
        name=record.name,
        text=record.text,
        match_score=record.match_score,
        inferred_gender=gender.label,
        inferred_race=race.label,
        gender_confidence=gender.confidence,
        race_confidence=race.confidence,
    )


def enrich_resumes(
    records: Iterable[ResumeRecord],
    progress: ProgressCallback | None = None,
    should_cancel: Callable[[], bool] | None = None,
) -> list[EnrichedResume]:
    """Enrich a whole batch in order.

    Args:
        records:       Normalized resumes.
        progress:      Optional ``progress(index, total)`` hook called before
                       each record (0-based index).
        should_cancel: Optional predicate checked before each record; when it
                       returns True the batch is abandoned with BatchCancelled.
    """
    batch: Sequence[ResumeRecord] = list(records)
    total = len(batch)
    enriched: list[EnrichedResume] = []

    for index, record in enumerate(batch):
        if should_cancel is not None and should_cancel():
            raise BatchCancelled(f"Batch cancelled after {index} of {total} resumes")
        if progress is not None:
            progress(index, total)
        enriched.append(enrich_resume(record))

    LOGGER.info("Enriched %s resumes with inferred demographics", total)
    return enriched
