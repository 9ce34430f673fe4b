"""
Generic-question detection.

Phrase tables and a pure predicate over them. The prompt builder quotes the
same tables so the model is told up front what gets rejected here.
"""
from __future__ import annotations

from typing import List, Tuple

from mindspark.errors import PatternViolation
from mindspark.models import GeneratedQuestion

BANNED_PHRASES: Tuple[str, ...] = (
    "fundamental process",
    "core mechanism",
    "historical development",
    "practical applications",
    "theoretical framework",
    "main purpose",
    "primary goal",
    "basic concept",
)

BANNED_OPENINGS: Tuple[str, ...] = (
    "what is the",
    "what are the",
)

META_OPTION_PHRASES: Tuple[str, ...] = (
    "core mechanism",
    "historical development",
    "practical applications",
    "theoretical framework",
)

MIN_OPTION_CHARS = 20
MIN_OPTION_WORDS = 4


def is_generic_option(option: str) -> bool:
    text = option.strip()
    return len(text) < MIN_OPTION_CHARS or len(text.split()) < MIN_OPTION_WORDS


def find_pattern_violations(question: GeneratedQuestion, topic: str) -> List[str]:
    """Return every rule the question breaks; an empty list means it passes."""
    violations: List[str] = []
    text = question.question.lower()

    for phrase in BANNED_PHRASES:
        if phrase in text:
            violations.append(f"question contains banned phrase '{phrase}'")
    for opening in BANNED_OPENINGS:
        if text.lstrip().startswith(opening + " ") or text.strip() == opening:
            violations.append(f"question opens with '{opening}'")

    topic_ref = f"of {topic.lower()}" if topic else None
    for index, option in enumerate(question.options):
        lowered = option.lower()
        for phrase in META_OPTION_PHRASES:
            if phrase in lowered:
                violations.append(f"option {index} contains meta phrase '{phrase}'")
        if topic_ref and topic_ref in lowered:
            violations.append(f"option {index} refers to '{topic_ref}'")

    if all(is_generic_option(o) for o in question.options):
        violations.append("all options are too short to be substantive")

    return violations


def ensure_quality(question: GeneratedQuestion, topic: str) -> GeneratedQuestion:
    violations = find_pattern_violations(question, topic)
    if violations:
        raise PatternViolation(violations[0], details=violations)
    return question
