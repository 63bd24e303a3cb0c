"""Errors raised while extracting a topic page."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Diagnostic


class TopicError(Exception):
    """Base class for every topic extraction failure."""


class PageTimeoutError(TopicError, TimeoutError):
    """The page never reached the expected state within the allowed time."""


class BrowserError(TopicError):
    """The browser could not be started."""


class EvaluationError(TopicError):
    """A script failed in the page context, or the driver lost the page."""


class MissingFieldError(TopicError):
    """The expected state path is absent; ``diagnostic`` says what was found instead."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(f"topic info not found: {diagnostic.describe()}")


class NoFeedsError(TopicError):
    """
    The topic was located but its feed list is absent.

    Callers may treat this as an empty result rather than a hard failure.
    """

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(f"no feeds found: {diagnostic.describe()}")


class DecodeError(TopicError):
    """The payload is present but cannot be parsed into ``shape``."""

    def __init__(self, shape: str, excerpt: str, reason: str):
        self.shape = shape
        self.excerpt = excerpt
        self.reason = reason
        super().__init__(f"failed to decode {shape}: {reason}")
