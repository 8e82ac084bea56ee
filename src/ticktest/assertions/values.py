"""Assertions on single values."""

from __future__ import annotations

from typing import Any, NoReturn

from ticktest.assertions.base import AssertionFailed, render


class Assert:
    """Namespace of single-value assertions.

    Every method returns ``None`` when the check holds and raises
    :class:`AssertionFailed` otherwise. An empty ``message`` means the
    default message built from the operands.
    """

    @staticmethod
    def are_equal(expected: Any, actual: Any, message: str = "") -> None:
        """Compare with ``==``. Use ``CollectionAssert.are_equal`` for numpy arrays."""
        if not message:
            message = f"Expected '{render(expected)}' but got '{render(actual)}'"
        if not expected == actual:
            raise AssertionFailed(message)

    @staticmethod
    def are_approximately_equal(
        expected: float, actual: float, tolerance: float, message: str = ""
    ) -> None:
        # Inclusive: a difference equal to the tolerance passes.
        if not message:
            message = (
                f"Expected {render(expected)}±{render(tolerance)} "
                f"but got '{render(actual)}'"
            )
        if abs(expected - actual) > tolerance:
            raise AssertionFailed(message)

    @staticmethod
    def is_true(expression: Any, message: str = "Expected true but got false") -> None:
        if not expression:
            raise AssertionFailed(message)

    @staticmethod
    def is_false(expression: Any, message: str = "Expected false but got true") -> None:
        if expression:
            raise AssertionFailed(message)

    @staticmethod
    def fail(message: str = "") -> NoReturn:
        """Fail unconditionally, e.g. when an expected exception was not raised."""
        raise AssertionFailed(message)
