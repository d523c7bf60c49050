"""JSON session store for the last enriched batch.

The file holds an object keyed by session key; the value under SESSION_KEY is
the flat list of enriched resume dicts:

    {"resumeData": [{"id": ..., "name": ..., "text": ..., "matchScore": ...,
                     "inferredGender": ..., "inferredRace": ...,
                     "genderConfidence": ..., "raceConfidence": ...}, ...]}

A stored list only counts as a restorable session when its first element
already carries ``inferredGender``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Sequence

from models import EnrichedResume

SESSION_STORE_PATH = os.getenv("SESSION_STORE_PATH", ".resume_bias_session.json")
SESSION_KEY = os.getenv("SESSION_KEY", "resumeData")

LOGGER = logging.getLogger(__name__)


def resume_to_dict(resume: EnrichedResume) -> dict[str, Any]:
    """Serialize one enriched resume; ``name`` is omitted when absent."""
    data: dict[str, Any] = {"id": resume.resume_id}
    if resume.name:
        data["name"] = resume.name
    data.update({
        "text": resume.text,
        "matchScore": resume.match_score,
        "inferredGender": resume.inferred_gender,
        "inferredRace": resume.inferred_race,
        "genderConfidence": resume.gender_confidence,
        "raceConfidence": resume.race_confidence,
    })
    return data


def resume_from_dict(data: dict[str, Any]) -> EnrichedResume:
    return EnrichedResume(
        resume_id=str(data["id"]),
        name=data.get("name") or None,
        text=data["text"],
        match_score=float(data["matchScore"]),
        inferred_gender=data.get("inferredGender") or "Unknown",
        inferred_race=data.get("inferredRace") or "Unknown",
        gender_confidence=float(data.get("genderConfidence") or 0.0),
        race_confidence=float(data.get("raceConfidence") or 0.0),
    )


def save_session(resumes: Sequence[EnrichedResume]) -> None:
    """Store ``resumes`` under SESSION_KEY, keeping any other keys in the file."""
    path = Path(SESSION_STORE_PATH)
    store = _read_store(path) or {}
    store[SESSION_KEY] = [resume_to_dict(r) for r in resumes]

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as fh:
        json.dump(store, fh, indent=2)

    LOGGER.info("Stored %s enriched resumes under %r in %s", len(resumes), SESSION_KEY, SESSION_STORE_PATH)


def load_session() -> list[EnrichedResume] | None:
    """Return the stored batch, or None when nothing restorable is on disk."""
    path = Path(SESSION_STORE_PATH)
    store = _read_store(path)
    if not store:
        return None

    data = store.get(SESSION_KEY)
    if not isinstance(data, list) or not data:
        return None
    if not isinstance(data[0], dict) or not data[0].get("inferredGender"):
        LOGGER.info("Stored session under %r is not enriched yet, ignoring it", SESSION_KEY)
        return None

    try:
        resumes = [resume_from_dict(item) for item in data]
    except (KeyError, TypeError, ValueError) as exc:
        LOGGER.error("Error parsing stored session data in %s: %s", SESSION_STORE_PATH, exc)
        return None

    LOGGER.info("Restored %s enriched resumes from %s", len(resumes), SESSION_STORE_PATH)
    return resumes


def _read_store(path: Path) -> dict[str, Any] | None:
    if not path.exists() or path.stat().st_size == 0:
        return None
    try:
        with path.open(encoding="utf-8") as fh:
            store = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        LOGGER.error("Error parsing stored session file %s: %s", path, exc)
        return None
    if not isinstance(store, dict):
        LOGGER.error("Stored session file %s does not hold a JSON object", path)
        return None
    return store
