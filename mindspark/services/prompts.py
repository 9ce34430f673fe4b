from __future__ import annotations

from typing import Optional, Sequence

from mindspark.models import Difficulty
from mindspark.services.quality import BANNED_OPENINGS, BANNED_PHRASES

MAX_RECENT_IN_PROMPT = 5

SYSTEM_PROMPT = (
    "You are an experienced teacher who writes precise multiple-choice quiz "
    "questions for college students. You always answer with a single JSON "
    "object and nothing else."
)

DIFFICULTY_GUIDANCE = {
    Difficulty.EASY: "recall of a specific fact, term or worked example",
    Difficulty.MEDIUM: "applying an idea to a short concrete scenario",
    Difficulty.HARD: "multi-step reasoning about a realistic situation or edge case",
}


def build_question_prompt(
    topic: str,
    difficulty: Difficulty = Difficulty.MEDIUM,
    recent_questions: Optional[Sequence[str]] = None,
) -> str:
    """Instruction text for one question; only the last few recent questions are quoted."""
    difficulty = Difficulty.coerce(difficulty)
    banned = ", ".join(f'"{p}"' for p in BANNED_PHRASES)
    openings = " or ".join(f'"{o.capitalize()} ..."' for o in BANNED_OPENINGS)

    lines = [
        f'Write exactly one multiple-choice question about "{topic}" '
        f"at {difficulty.value} difficulty ({DIFFICULTY_GUIDANCE[difficulty]}).",
        "",
        "Rules:",
        "- Give exactly four answer options. All four must be different from each other.",
        "- Exactly one option is correct; the other three are plausible but wrong.",
        "- Ground the question in a concrete scenario, example, number, name or event.",
        "  Do not ask for abstract definitions.",
        f"- Never use these generic phrasings: {banned}.",
        f"- Do not start the question with {openings}.",
        f'- Options must not be meta categories such as "Core mechanism of {topic}".',
        "- Each option should be a specific statement, not a one or two word label.",
    ]

    recent = [q for q in (recent_questions or []) if q][-MAX_RECENT_IN_PROMPT:]
    if recent:
        lines += ["", "Avoid repeating or paraphrasing these recent questions:"]
        lines += [f"- {q}" for q in recent]

    lines += [
        "",
        "Respond with ONLY valid JSON in exactly this shape, with no markdown and no commentary:",
        "{",
        '  "question": "The question text?",',
        '  "options": ["Option A", "Option B", "Option C", "Option D"],',
        '  "correctAnswer": 0,',
        '  "explanation": "Why the correct option is right"',
        "}",
        "correctAnswer is the 0-based index (0, 1, 2 or 3) of the correct option.",
    ]
    return "\n".join(lines)
