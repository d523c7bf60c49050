"""CSV ingestion and row normalization into ResumeRecord objects.

Rows arrive in whatever shape the uploaded CSV had. Each row is resolved in
priority order:

  1. ``Resume`` + ``Score`` columns  — text from Resume, score from Score,
     name from a ``Name: ...`` line inside the text.
  2. any value longer than 50 chars — treated as the resume body; name from
     ``Name: ...``, score from a trailing number (random fallback).
  3. known alternate column names   — see NAME_FIELDS / TEXT_FIELDS /
     SCORE_FIELDS; placeholder text and random score as fallbacks.

Input-shape problems never raise: they fall back to placeholder text and a
pseudo-random score in [60, 100).
"""

from __future__ import annotations

import csv
import io
import logging
import math
import random
import re
import sys
from pathlib import Path
from typing import Any, Iterable, Mapping

from models import ResumeRecord

LOGGER = logging.getLogger(__name__)

DELIMITER = ","
MIN_RESUME_BODY_LENGTH = 50

NAME_FIELDS: tuple[str, ...] = ("name", "Name", "full_name", "fullName", "candidate_name", "applicant_name")
TEXT_FIELDS: tuple[str, ...] = ("text", "resume_text", "content", "description", "summary")
SCORE_FIELDS: tuple[str, ...] = ("matchScore", "match_score", "score", "Score", "rating", "Rating")

_NAME_PATTERN = re.compile(r"Name:\s*([^\n\r]+)", re.IGNORECASE)
_TRAILING_NUMBER_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*$", re.MULTILINE)
_LEADING_FLOAT_PATTERN = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_NON_NUMERIC_PATTERN = re.compile(r"[^\d.\-]")
_EDGE_QUOTES_PATTERN = re.compile(r"^[\"']|[\"']\Z")

_DEFAULT_RNG = random.Random()


def _raise_field_size_limit() -> int:
    """Lift the csv module's 128 KiB per-field cap so long resume bodies parse."""
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return limit
        except OverflowError:  # C long is 32-bit on some platforms
            limit //= 10


_raise_field_size_limit()


class CsvParseError(RuntimeError):
    """The uploaded file could not be read as a CSV table with a header row."""


# ---------------------------------------------------------------------------
# CSV reading
# ---------------------------------------------------------------------------


def read_resume_csv(path: str | Path) -> list[dict[str, Any]]:
    """Read a CSV file from disk into cleaned rows (see parse_csv_text)."""
    try:
        text = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise CsvParseError(f"Could not read CSV file {path}: {exc}") from exc
    return parse_csv_text(text)


def parse_csv_text(text: str) -> list[dict[str, Any]]:
    """Parse delimited text into row dicts.

    Handles the collapsed-row case where the whole line was quoted, so the
    header has a single field whose name still contains the delimiter.
    """
    reader = csv.DictReader(io.StringIO(text), delimiter=DELIMITER)
    try:
        fieldnames = reader.fieldnames
        raw_rows = [row for row in reader if any(_has_content(v) for v in row.values())]
    except csv.Error as exc:
        raise CsvParseError(f"Malformed CSV at line {reader.line_num}: {exc}") from exc

    if not fieldnames:
        raise CsvParseError("CSV has no header row")

    if len(fieldnames) == 1 and DELIMITER in fieldnames[0]:
        LOGGER.info("Detected collapsed CSV rows, re-splitting on %r", DELIMITER)
        return _resplit_collapsed_rows(fieldnames[0], raw_rows)

    return [row for row in (_clean_row(r) for r in raw_rows) if any(_has_content(v) for v in row.values())]


def _resplit_collapsed_rows(header_field: str, raw_rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    headers = [h.strip() for h in header_field.split(DELIMITER)]
    rows: list[dict[str, Any]] = []
    for raw in raw_rows:
        values = [v.strip() for v in (raw.get(header_field) or "").split(DELIMITER)]
        row = {header: values[i] if i < len(values) and values[i] else "" for i, header in enumerate(headers)}
        # Repeated header lines inside the file.
        if all(row[header] == header for header in headers):
            continue
        rows.append(row)
    return rows


def _clean_row(row: Mapping[Any, Any]) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for key, value in row.items():
        if key is None:  # overflow cells beyond the header width
            continue
        clean_key = _strip_edge_quotes(key)
        cleaned[clean_key] = _strip_edge_quotes(value) if isinstance(value, str) else value
    return cleaned


def _strip_edge_quotes(value: str) -> str:
    return _EDGE_QUOTES_PATTERN.sub("", value).strip()


def _has_content(value: Any) -> bool:
    return value is not None and value != ""


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------


def normalize_rows(rows: Iterable[Mapping[str, Any]], rng: random.Random | None = None) -> list[ResumeRecord]:
    """Convert heterogeneous rows into ResumeRecords with ids ``resume_1``, ``resume_2``, ..."""
    rng = rng or _DEFAULT_RNG
    records = [normalize_row(row, index, rng) for index, row in enumerate(rows)]
    LOGGER.info("Normalized %s resume rows", len(records))
    return records


def normalize_row(row: Mapping[str, Any], index: int, rng: random.Random | None = None) -> ResumeRecord:
    """Normalize one row; ``index`` is the 0-based row position."""
    rng = rng or _DEFAULT_RNG
    placeholder = f"Resume content for candidate {index + 1}"
    name: str | None = None

    if row.get("Resume") and row.get("Score"):
        text = str(row["Resume"])
        score = parse_float(row["Score"])
        name = extract_name(text)
    else:
        body = _find_resume_body(row)
        if body:
            text = body
            name = extract_name(body)
            score = extract_trailing_score(body)
            if score is None:
                score = random_score(rng)
        else:
            name_field = _first_present(row, NAME_FIELDS)
            name = str(row[name_field]) if name_field else None

            text_field = _first_present(row, TEXT_FIELDS)
            text = str(row[text_field]) if text_field else placeholder

            score_field = _first_present(row, SCORE_FIELDS)
            if score_field:
                score = parse_float(_NON_NUMERIC_PATTERN.sub("", str(row[score_field])))
            else:
                LOGGER.debug("Row %s has no score column, using a random score", index + 1)
                score = random_score(rng)

    if math.isnan(score):
        LOGGER.warning("Row %s has an unparsable score, using a random score", index + 1)
        score = random_score(rng)

    return ResumeRecord(
        resume_id=f"resume_{index + 1}",
        name=name or None,
        text=text or placeholder,
        match_score=score,
    )


def extract_name(text: str) -> str | None:
    """Return the text after the first ``Name:`` label, trimmed."""
    match = _NAME_PATTERN.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


def extract_trailing_score(text: str) -> float | None:
    """Return the first number that ends a line of ``text``, if any."""
    match = _TRAILING_NUMBER_PATTERN.search(text)
    return float(match.group(1)) if match else None


def parse_float(value: Any) -> float:
    """Lenient float parse: use the leading numeric prefix, NaN if there is none."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = _LEADING_FLOAT_PATTERN.match(str(value))
    if not match:
        return math.nan
    try:
        return float(match.group(1))
    except ValueError:
        return math.nan


def random_score(rng: random.Random) -> float:
    """Pseudo-random fallback score in [60, 100)."""
    return rng.random() * 40 + 60


def _find_resume_body(row: Mapping[str, Any]) -> str | None:
    for value in row.values():
        if isinstance(value, str) and len(value.strip()) > MIN_RESUME_BODY_LENGTH:
            return value
    return None


def _first_present(row: Mapping[str, Any], fields: tuple[str, ...]) -> str | None:
    return next((f for f in fields if row.get(f)), None)
