"""
Failure kinds of the question pipeline.

Every one of them is recovered inside the generator by switching to the
curated question bank; none reaches the HTTP caller as an error.
"""
from enum import Enum


class FallbackReason(str, Enum):
    CONFIGURATION_MISSING = "configuration_missing"
    TRANSPORT_FAILURE = "transport_failure"
    PARSE_FAILURE = "parse_failure"
    PATTERN_VIOLATION = "pattern_violation"


class QuestionGenerationError(Exception):
    """Base class for failures that route a request to the fallback bank"""

    reason: FallbackReason

    def __init__(self, message: str = "", details=None):
        super().__init__(message or self.__class__.__doc__)
        self.details = details or []


class ConfigurationMissing(QuestionGenerationError):
    """Model API credential is missing or too short"""

    reason = FallbackReason.CONFIGURATION_MISSING


class TransportFailure(QuestionGenerationError):
    """Model API call failed or timed out"""

    reason = FallbackReason.TRANSPORT_FAILURE


class ParseFailure(QuestionGenerationError):
    """Model response is not a structurally valid question"""

    reason = FallbackReason.PARSE_FAILURE


class PatternViolation(QuestionGenerationError):
    """Generated question matches a known generic template"""

    reason = FallbackReason.PATTERN_VIOLATION
