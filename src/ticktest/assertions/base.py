"""Base signal type for the assertion system."""

from __future__ import annotations

from typing import Any


class AssertionFailed(Exception):
    """Raised by an assertion helper when a check does not hold.

    Deliberately not a subclass of the builtin ``AssertionError``: a bare
    ``assert`` statement in a test is reported as an unexpected fault.
    """

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


def render(value: Any) -> str:
    """Render a value for a failure message.

    Integral floats drop their trailing ``.0`` so ``1.0`` reads as ``1``.
    """
    if isinstance(value, float):
        text = str(value)
        if text.endswith(".0"):
            return text[:-2]
        return text
    return str(value)
