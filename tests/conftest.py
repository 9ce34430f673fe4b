import json
import random

import pytest

from mindspark.config import Settings
from mindspark.middleware.rate_limit import limiter
from mindspark.services.generator import QuestionGenerationService
from mindspark.services.history import QuestionHistory
from mindspark.services.llm import QuestionModelClient

from fakes import BIOLOGY_GENERIC, GOOD_QUESTION, TEST_API_KEY, FakeOpenAI


@pytest.fixture(autouse=True)
def disable_rate_limits():
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def settings():
    return Settings(openai_api_key=TEST_API_KEY)


@pytest.fixture
def make_service(settings):
    """Build a service whose model returns ``content`` or raises ``error``"""
    def factory(content=None, error=None, api_key=TEST_API_KEY, history=None, seed=7):
        if isinstance(content, dict):
            content = json.dumps(content)
        fake = FakeOpenAI(content=content, error=error)
        client = QuestionModelClient(Settings(openai_api_key=api_key), client=fake)
        service = QuestionGenerationService(
            client=client,
            history=history if history is not None else QuestionHistory(limit=10),
            default_topic=settings.default_topic,
            rng=random.Random(seed),
        )
        service.fake = fake
        return service
    return factory


@pytest.fixture
def good_question():
    return json.loads(json.dumps(GOOD_QUESTION))


@pytest.fixture
def biology_generic():
    return json.loads(json.dumps(BIOLOGY_GENERIC))
