# services/errors.py
"""
Error taxonomy shared by the normalizer, the collaborator client and the flows.

Flows turn every one of these into state; only InputValidationError reaches
the route layer.
"""
from typing import Optional


class FactCheckError(Exception):
    """Base class for errors raised by this application."""


class InputValidationError(FactCheckError):
    """Text rejected locally before any call to the AI service."""


class ServiceUnavailableError(FactCheckError):
    """The AI client could not be initialised (usually a missing API key)."""


class MalformedPayloadError(FactCheckError):
    """The AI service answered with something that is not the JSON we asked for."""

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.raw = raw


class InvalidQuizDataError(FactCheckError):
    """The quiz payload parsed but is empty or not a list of questions."""
