from __future__ import annotations

import json
import random
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from mindspark.errors import ParseFailure
from mindspark.models import GeneratedQuestion


def strip_code_fences(content: str) -> str:
    # Strip common code fences ```json ... ``` or ``` ... ```
    text = (content or "").strip()
    if text.startswith("```"):
        first_nl = text.find("\n")
        text = text[first_nl + 1 :] if first_nl != -1 else text[3:]
        text = text.strip()
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def find_json_object(text: str) -> Optional[str]:
    """
    Return the first balanced {...} span, ignoring braces inside strings.

    One pass with a stack of open braces: the span with the earliest opening
    brace that gets closed wins.
    """
    first = text.find("{")
    if first == -1:
        return None
    opened: List[int] = []
    best: Optional[Tuple[int, int]] = None
    in_string = False
    escaped = False
    for i in range(first, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            opened.append(i)
        elif ch == "}" and opened:
            start = opened.pop()
            if not opened:
                return text[start : i + 1]
            if best is None or start < best[0]:
                best = (start, i)
    return text[best[0] : best[1] + 1] if best else None


def _load_object(text: str) -> Any:
    try:
        return json.loads(text)
    except (json.JSONDecodeError, RecursionError):
        pass
    candidate = find_json_object(text)
    if candidate is None:
        raise ParseFailure("response contains no JSON object")
    try:
        return json.loads(candidate)
    except (json.JSONDecodeError, RecursionError) as e:
        raise ParseFailure(f"embedded JSON object is invalid: {e.__class__.__name__}")


def coerce_correct_answer(value: Any, rng: Optional[random.Random] = None) -> int:
    """Accept integral values in [0, 3]; anything else becomes a random index."""
    rng = rng or random
    if isinstance(value, bool):
        return rng.randint(0, 3)
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return rng.randint(0, 3)
    if isinstance(value, float):
        if not value.is_integer():
            return rng.randint(0, 3)
        value = int(value)
    if isinstance(value, int) and 0 <= value <= 3:
        return value
    return rng.randint(0, 3)


def parse_question(content: str, rng: Optional[random.Random] = None) -> GeneratedQuestion:
    """
    Turn raw model output into a GeneratedQuestion.

    Raises ParseFailure when the text holds no usable object, the question is
    blank, or the options are not four distinct non-empty strings. A bad
    correctAnswer is repaired rather than rejected.
    """
    data = _load_object(strip_code_fences(content))
    if not isinstance(data, dict):
        raise ParseFailure("response JSON is not an object")

    question = data.get("question")
    if not isinstance(question, str) or not question.strip():
        raise ParseFailure("question text is missing")

    options = data.get("options")
    if not isinstance(options, list) or len(options) != 4:
        raise ParseFailure("options must be a list of exactly four entries")
    if any(o is None or isinstance(o, (dict, list)) for o in options):
        raise ParseFailure("options must be plain text")

    correct_answer = coerce_correct_answer(data.get("correctAnswer"), rng)
    options = [str(o).strip() for o in options]

    explanation = data.get("explanation")
    if not isinstance(explanation, str) or not explanation.strip():
        explanation = f"The correct answer is: {options[correct_answer]}."

    try:
        return GeneratedQuestion(
            question=question,
            options=options,
            correct_answer=correct_answer,
            explanation=explanation,
        )
    except ValidationError as e:
        raise ParseFailure(f"question failed structural checks: {e.error_count()} error(s)")
