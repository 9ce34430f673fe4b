from __future__ import annotations

import re
from typing import Dict, Tuple

# Longest phrases first so "what is" never shadows "what are".
INTERROGATIVE_PREFIXES: Tuple[str, ...] = (
    "can you explain",
    "tell me about",
    "what are",
    "what is",
    "explain",
    "define",
    "describe",
)

ACRONYMS: Dict[str, str] = {
    "dsa": "Data Structures and Algorithms",
    "ai": "Artificial Intelligence",
    "ml": "Machine Learning",
    "oop": "Object Oriented Programming",
    "dbms": "Database Management Systems",
    "os": "Operating Systems",
    "cn": "Computer Networks",
}

QUICK_TOPICS: Tuple[str, ...] = (
    "JavaScript",
    "Python",
    "Machine Learning",
    "History",
    "Science",
    "Mathematics",
)


def _strip_prefix(text: str) -> str:
    for prefix in INTERROGATIVE_PREFIXES:
        if text == prefix:
            return ""
        if text.startswith(prefix) and not text[len(prefix)].isalnum():
            return text[len(prefix):].strip()
    return text


def normalize_topic(raw_input, default_topic: str = "General Knowledge") -> str:
    """
    Turn free text into a display-ready subject.

    Never raises and never returns an empty string: anything that leaves
    nothing behind after cleanup resolves to ``default_topic``.
    """
    text = (raw_input or "") if isinstance(raw_input, str) else str(raw_input or "")
    text = text.strip().lower()
    if not text:
        return default_topic

    text = _strip_prefix(text)
    text = text.rstrip("?!. ").strip()
    if not text:
        return default_topic

    if text in ACRONYMS:
        return ACRONYMS[text]

    words = [w[:1].upper() + w[1:].lower() for w in re.split(r"\s+", text) if w]
    return " ".join(words) or default_topic
