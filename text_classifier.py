"""Lexical gender heuristic over agentic vs. communal resume wording (no name needed)."""

from __future__ import annotations

from models import FEMALE, MALE, UNKNOWN_INFERENCE, Inference

# Words associated with male-coded resume language.
AGENTIC_WORDS: tuple[str, ...] = (
    "achieved",
    "accomplished",
    "delivered",
    "executed",
    "led",
    "managed",
    "directed",
    "drove",
    "spearheaded",
    "pioneered",
    "dominated",
    "conquered",
    "won",
    "beat",
    "outperformed",
    "exceeded",
    "surpassed",
    "competitive",
    "aggressive",
    "assertive",
    "confident",
    "independent",
    "ambitious",
    "decisive",
)

# Words associated with female-coded resume language.
COMMUNAL_WORDS: tuple[str, ...] = (
    "collaborated",
    "supported",
    "helped",
    "assisted",
    "coordinated",
    "facilitated",
    "contributed",
    "participated",
    "cooperated",
    "mentored",
    "guided",
    "nurtured",
    "caring",
    "empathetic",
    "understanding",
    "patient",
    "thoughtful",
    "considerate",
    "helpful",
    "supportive",
    "collaborative",
    "team-oriented",
    "inclusive",
)

MAX_TEXT_CONFIDENCE = 0.75
MALE_RATIO_THRESHOLD = 0.6
FEMALE_RATIO_THRESHOLD = 0.4


def count_occurrences(text: str, words: tuple[str, ...]) -> int:
    """Total substring hits of ``words`` in ``text`` ("led" also counts inside "skilled")."""
    return sum(text.count(word) for word in words)


def classify_gender_by_text(text: str) -> Inference:
    """Return a gender guess from the agentic share of coded words.

    Decision logic:
    - no coded words at all   -> Unknown, 0.0
    - agentic ratio  > 0.6    -> Male,   min(0.75, ratio)
    - agentic ratio  < 0.4    -> Female, min(0.75, 1 - ratio)
    - otherwise (0.4 .. 0.6)  -> Unknown, 0.0
    """
    lower = (text or "").lower()

    agentic = count_occurrences(lower, AGENTIC_WORDS)
    communal = count_occurrences(lower, COMMUNAL_WORDS)
    total = agentic + communal
    if total == 0:
        return UNKNOWN_INFERENCE

    ratio = agentic / total
    if ratio > MALE_RATIO_THRESHOLD:
        return Inference(MALE, min(MAX_TEXT_CONFIDENCE, ratio))
    if ratio < FEMALE_RATIO_THRESHOLD:
        return Inference(FEMALE, min(MAX_TEXT_CONFIDENCE, 1 - ratio))

    return UNKNOWN_INFERENCE  # too balanced to call
