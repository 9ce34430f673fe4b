"""
Question generation pipeline.

normalize -> prompt -> model call -> parse -> quality gate, with every failure
switching to the curated bank. ``generate`` always returns a question; the
outcome type records which path produced it.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Union

import structlog

from mindspark.errors import FallbackReason, QuestionGenerationError
from mindspark.models import Difficulty, GeneratedQuestion
from mindspark.services.fallback import select_fallback_question
from mindspark.services.history import QuestionHistory
from mindspark.services.llm import QuestionModelClient
from mindspark.services.monitoring import QUESTION_GENERATION_REQUESTS
from mindspark.services.parsing import parse_question
from mindspark.services.prompts import MAX_RECENT_IN_PROMPT, build_question_prompt
from mindspark.services.quality import ensure_quality
from mindspark.services.topics import normalize_topic

logger = structlog.get_logger()

FALLBACK_NOTES = {
    FallbackReason.CONFIGURATION_MISSING: "AI generation is not configured; showing a curated question instead.",
    FallbackReason.TRANSPORT_FAILURE: "AI service is unavailable right now; showing a curated question instead.",
    FallbackReason.PARSE_FAILURE: "AI response could not be read; showing a curated question instead.",
    FallbackReason.PATTERN_VIOLATION: "AI question was too generic; showing a curated question instead.",
}


@dataclass(frozen=True)
class Generated:
    question: GeneratedQuestion
    topic: str
    difficulty: Difficulty

    source = "generated"
    note = None

    def meta(self) -> dict:
        return {"source": self.source, "topic": self.topic, "difficulty": self.difficulty.value}


@dataclass(frozen=True)
class Fallback:
    question: GeneratedQuestion
    topic: str
    difficulty: Difficulty
    reason: FallbackReason
    detail: str = ""

    source = "fallback"

    @property
    def note(self) -> str:
        return FALLBACK_NOTES[self.reason]

    def meta(self) -> dict:
        return {
            "source": self.source,
            "reason": self.reason.value,
            "topic": self.topic,
            "difficulty": self.difficulty.value,
        }


GenerationOutcome = Union[Generated, Fallback]


class QuestionGenerationService:
    def __init__(
        self,
        client: QuestionModelClient,
        history: QuestionHistory,
        default_topic: str = "General Knowledge",
        rng: Optional[random.Random] = None,
    ):
        self.client = client
        self.history = history
        self.default_topic = default_topic
        self.rng = rng or random.Random()

    def _generate_with_model(self, topic: str, difficulty: Difficulty, recent) -> GeneratedQuestion:
        prompt = build_question_prompt(topic, difficulty, recent)
        content = self.client.complete(prompt)
        question = parse_question(content, self.rng)
        return ensure_quality(question, topic)

    def generate(self, raw_topic: Optional[str], difficulty=Difficulty.MEDIUM) -> GenerationOutcome:
        topic = normalize_topic(raw_topic, self.default_topic)
        difficulty = Difficulty.coerce(difficulty)
        recent = self.history.recent(topic)

        try:
            question = self._generate_with_model(topic, difficulty, recent[-MAX_RECENT_IN_PROMPT:])
            outcome: GenerationOutcome = Generated(question=question, topic=topic, difficulty=difficulty)
            logger.info("question_generated", topic=topic, difficulty=difficulty.value)
        except QuestionGenerationError as e:
            question = select_fallback_question(topic, recent, self.rng)
            outcome = Fallback(
                question=question,
                topic=topic,
                difficulty=difficulty,
                reason=e.reason,
                detail=str(e),
            )
            logger.warning(
                "question_fallback",
                topic=topic,
                difficulty=difficulty.value,
                reason=e.reason.value,
                detail=str(e),
            )

        self.history.record(topic, outcome.question.question)
        QUESTION_GENERATION_REQUESTS.labels(
            source=outcome.source,
            reason=outcome.reason.value if isinstance(outcome, Fallback) else "none",
        ).inc()
        return outcome
