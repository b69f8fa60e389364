"""
Exception hierarchy for ephemcore.

Every error raised by the public API derives from EphemerisError, so callers
can catch a single type. Subclasses distinguish the three failure families:
a missing/out-of-range ephemeris, a body/flag combination that makes no
sense, and an eclipse search that ran out of lunations.
"""

from typing import Any, Optional


class EphemerisError(RuntimeError):
    """
    Base class for all ephemcore errors.

    Args:
        message: Human readable description
        **context: Extra key/value details (body, jd, flags, ...) kept on the
            exception for logging and debugging
    """

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in sorted(self.context.items()))
        return f"{self.message} ({details})"


class EphemerisUnavailableError(EphemerisError):
    """Ephemeris file missing, date outside its range, or no capable provider."""

    def __init__(
        self,
        message: str,
        body: Optional[int] = None,
        jd: Optional[float] = None,
        **context: Any,
    ):
        if body is not None:
            context["body"] = body
        if jd is not None:
            context["jd"] = jd
        super().__init__(message, **context)


class UnsupportedCombinationError(EphemerisError, ValueError):
    """Invalid body/flag combination, rejected before any computation."""


class EclipseSearchError(EphemerisError):
    """Eclipse search exhausted its lunation budget without a match."""
