from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
import time
import structlog

from mindspark.config import Settings, get_settings
from mindspark.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from mindspark.routers import questions as questions_router
from mindspark.services.generator import QuestionGenerationService
from mindspark.services.history import build_history
from mindspark.services.llm import QuestionModelClient
from mindspark.services.logging import configure_logging, log_api_request
from mindspark.services.monitoring import health_checker, get_metrics, REQUEST_COUNT, REQUEST_DURATION

# Configure logging
configure_logging()
logger = structlog.get_logger()


def build_question_service(settings: Settings) -> QuestionGenerationService:
    history = build_history(
        limit=settings.history_limit,
        max_topics=settings.history_max_topics,
        redis_url=settings.history_redis_url,
    )
    return QuestionGenerationService(
        client=QuestionModelClient(settings),
        history=history,
        default_topic=settings.default_topic,
    )


settings = get_settings()

app = FastAPI(
    title="MindSpark Question Service",
    description="AI-assisted multiple-choice question generation with a curated fallback bank",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

app.state.question_service = build_question_service(settings)
if not settings.has_api_key():
    logger.warning("OPENAI_API_KEY not configured; every question will come from the curated bank")


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    log_api_request(request)

    response = await call_next(request)

    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    REQUEST_COUNT.labels(
        method=request.method,
        endpoint=request.url.path,
        status=response.status_code
    ).inc()
    REQUEST_DURATION.labels(
        method=request.method,
        endpoint=request.url.path
    ).observe(process_time)

    log_api_request(request, response, duration=process_time)

    return response


# ----------------- Health & Monitoring Endpoints -----------------
@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    return health_checker.get_health_status(request.app.state.question_service)


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint"""
    return get_metrics()


# ----------------- Routers -----------------
app.include_router(questions_router.router)
