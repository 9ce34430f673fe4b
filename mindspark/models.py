from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def coerce(cls, value: Optional[str]) -> "Difficulty":
        """Map free text onto a difficulty, defaulting to medium."""
        if isinstance(value, cls):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.MEDIUM


class GeneratedQuestion(BaseModel):
    """A four-option multiple-choice question with exactly one correct answer."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    question: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=4, max_length=4)
    correct_answer: int = Field(..., alias="correctAnswer", ge=0, le=3)
    explanation: str = Field(..., min_length=1)

    @field_validator("question", "explanation")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Field cannot be empty")
        return v.strip()

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: List[str]) -> List[str]:
        cleaned = [str(o).strip() for o in v]
        if any(not o for o in cleaned):
            raise ValueError("Options cannot be empty")
        if len({o.lower() for o in cleaned}) != len(cleaned):
            raise ValueError("Options must be distinct")
        return cleaned

    @property
    def correct_option(self) -> str:
        return self.options[self.correct_answer]

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


# ----------------- Request bodies -----------------
class GenerateQuestionRequest(BaseModel):
    topic: Optional[str] = None
    difficulty: Optional[str] = Difficulty.MEDIUM.value


class GenerateQuestionsRequest(GenerateQuestionRequest):
    count: int = Field(default=5, ge=1, le=10)
