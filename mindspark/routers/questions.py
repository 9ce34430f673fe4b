from typing import Optional

from fastapi import APIRouter, Depends, Request

from mindspark.middleware.rate_limit import ai_generation_limit, general_api_limit
from mindspark.models import Difficulty, GenerateQuestionRequest, GenerateQuestionsRequest
from mindspark.services.fallback import fallback_topics
from mindspark.services.generator import QuestionGenerationService
from mindspark.services.topics import ACRONYMS, QUICK_TOPICS


router = APIRouter(prefix="/api", tags=["questions"])


def get_question_service(request: Request) -> QuestionGenerationService:
    return request.app.state.question_service


def _envelope(outcome) -> dict:
    body = {"success": True, "data": outcome.question.to_payload(), "meta": outcome.meta()}
    if outcome.note:
        body["note"] = outcome.note
    return body


@router.post("/generate-question")
@ai_generation_limit()
def generate_question(
    request: Request,
    payload: Optional[GenerateQuestionRequest] = None,
    service: QuestionGenerationService = Depends(get_question_service),
):
    """Always 200: failures are served from the curated bank and flagged in meta/note."""
    payload = payload or GenerateQuestionRequest()
    outcome = service.generate(payload.topic, payload.difficulty)
    return _envelope(outcome)


@router.post("/generate-questions")
@ai_generation_limit()
def generate_questions(
    request: Request,
    payload: GenerateQuestionsRequest,
    service: QuestionGenerationService = Depends(get_question_service),
):
    outcomes = [service.generate(payload.topic, payload.difficulty) for _ in range(payload.count)]
    body = {
        "success": True,
        "data": [o.question.to_payload() for o in outcomes],
        "meta": [o.meta() for o in outcomes],
    }
    notes = sorted({o.note for o in outcomes if o.note})
    if notes:
        body["notes"] = notes
    return body


@router.get("/topics/quick")
@general_api_limit()
def quick_topics(request: Request):
    return {
        "quick_topics": list(QUICK_TOPICS),
        "acronyms": dict(ACRONYMS),
        "curated_topics": fallback_topics(),
        "difficulties": [d.value for d in Difficulty],
    }
