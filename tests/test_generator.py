"""
Unit tests for the question generation pipeline
"""
import httpx
import openai
import pytest

from mindspark.errors import FallbackReason
from mindspark.services.generator import Fallback, Generated
from mindspark.services.history import QuestionHistory

REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def assert_structurally_valid(question):
    assert question.question.strip()
    assert question.explanation.strip()
    assert len(question.options) == 4
    assert len({o.lower() for o in question.options}) == 4
    assert all(o.strip() for o in question.options)
    assert 0 <= question.correct_answer <= 3


class TestGeneratedPath:
    def test_valid_model_output_is_accepted(self, make_service, good_question):
        service = make_service(content=good_question)
        outcome = service.generate("what is physics", "hard")

        assert isinstance(outcome, Generated)
        assert outcome.question.question == good_question["question"]
        assert outcome.topic == "Physics"
        assert outcome.meta() == {"source": "generated", "topic": "Physics", "difficulty": "hard"}
        assert outcome.note is None

    def test_prompt_uses_normalized_topic(self, make_service, good_question):
        service = make_service(content=good_question)
        service.generate("dsa")
        prompt = service.fake.completions.calls[0]["messages"][-1]["content"]
        assert '"Data Structures and Algorithms"' in prompt

    def test_prompt_includes_recent_history(self, make_service, good_question):
        history = QuestionHistory(limit=10)
        for i in range(7):
            history.record("Physics", f"Earlier physics question {i}?")
        service = make_service(content=good_question, history=history)
        service.generate("Physics")

        prompt = service.fake.completions.calls[0]["messages"][-1]["content"]
        assert "Earlier physics question 1?" not in prompt
        for i in range(2, 7):
            assert f"Earlier physics question {i}?" in prompt

    def test_repairs_correct_answer(self, make_service, good_question):
        good_question["correctAnswer"] = 7
        outcome = make_service(content=good_question).generate("Physics")
        assert isinstance(outcome, Generated)
        assert 0 <= outcome.question.correct_answer <= 3

    def test_unknown_difficulty_becomes_medium(self, make_service, good_question):
        outcome = make_service(content=good_question).generate("Physics", "nightmare")
        assert outcome.meta()["difficulty"] == "medium"


class TestFallbackPath:
    def test_missing_credential(self, make_service, good_question):
        service = make_service(content=good_question, api_key=None)
        outcome = service.generate("Astronomy")

        assert isinstance(outcome, Fallback)
        assert outcome.reason is FallbackReason.CONFIGURATION_MISSING
        assert service.fake.completions.calls == []

    @pytest.mark.parametrize("error", [
        openai.APIConnectionError(request=REQUEST),
        openai.APITimeoutError(request=REQUEST),
    ])
    def test_transport_errors(self, make_service, error):
        outcome = make_service(error=error).generate("Astronomy")
        assert isinstance(outcome, Fallback)
        assert outcome.reason is FallbackReason.TRANSPORT_FAILURE

    @pytest.mark.parametrize("content", ["", "Sorry, I can't do that.", '{"question": "Q?", "options": ["a"]}'])
    def test_unparsable_output(self, make_service, content):
        outcome = make_service(content=content).generate("Astronomy")
        assert isinstance(outcome, Fallback)
        assert outcome.reason is FallbackReason.PARSE_FAILURE

    def test_deeply_nested_output(self, make_service):
        outcome = make_service(content="[" * 100000 + "]" * 100000).generate("Astronomy")
        assert isinstance(outcome, Fallback)
        assert outcome.reason is FallbackReason.PARSE_FAILURE
        assert len(outcome.question.options) == 4

    def test_generic_output(self, make_service, biology_generic):
        outcome = make_service(content=biology_generic).generate("biology")
        assert isinstance(outcome, Fallback)
        assert outcome.reason is FallbackReason.PATTERN_VIOLATION
        assert outcome.topic == "Biology"
        assert "fundamental process" not in outcome.question.question.lower()

    def test_fallback_is_flagged(self, make_service):
        outcome = make_service(content="not json").generate("Astronomy")
        assert outcome.meta()["source"] == "fallback"
        assert outcome.meta()["reason"] == "parse_failure"
        assert outcome.note

    def test_known_topic_uses_its_curated_entry(self, make_service):
        from mindspark.services.fallback import TOPIC_QUESTIONS

        outcome = make_service(api_key=None).generate("astronomy")
        assert outcome.question.question in {q.question for q in TOPIC_QUESTIONS["Astronomy"]}


class TestAlwaysSucceeds:
    @pytest.mark.parametrize("kwargs", [
        {"api_key": None},
        {"api_key": "short"},
        {"error": openai.APIConnectionError(request=REQUEST)},
        {"error": openai.APITimeoutError(request=REQUEST)},
        {"content": "```json\n{broken```"},
        {"content": "[]"},
    ])
    @pytest.mark.parametrize("topic", ["", "   ", "what is", "Astronomy", "dsa", "!!!", "Underwater Basket Weaving"])
    def test_every_failure_yields_a_valid_question(self, make_service, kwargs, topic):
        outcome = make_service(**kwargs).generate(topic)
        assert isinstance(outcome, Fallback)
        assert_structurally_valid(outcome.question)
        assert outcome.meta()["source"] == "fallback"

    def test_pattern_violation_yields_a_valid_question(self, make_service, biology_generic):
        outcome = make_service(content=biology_generic).generate("Biology")
        assert_structurally_valid(outcome.question)


class TestHistoryRecording:
    def test_both_paths_are_recorded(self, make_service, good_question):
        history = QuestionHistory(limit=10)
        make_service(content=good_question, history=history).generate("Physics")
        fallback = make_service(api_key=None, history=history).generate("Physics")

        assert history.recent("Physics") == [good_question["question"], fallback.question.question]

    def test_history_stays_bounded(self, make_service):
        history = QuestionHistory(limit=10)
        service = make_service(api_key=None, history=history)
        for _ in range(25):
            service.generate("Astronomy")
            assert len(history.recent("Astronomy")) <= 10
        assert len(history.recent("Astronomy")) == 10

    def test_fallback_avoids_immediate_repeats(self, make_service):
        service = make_service(api_key=None)
        first = service.generate("Medieval Poetry").question.question
        second = service.generate("Medieval Poetry").question.question
        assert first != second
