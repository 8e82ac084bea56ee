"""Assertions on ordered collections (flat arrays, 2-D grids, iterables)."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from ticktest.assertions.base import AssertionFailed, render


def _is_sequence(value: Any) -> bool:
    if isinstance(value, np.ndarray):
        return value.ndim >= 1
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _is_grid(value: Any) -> bool:
    """True for 2-D numpy arrays and non-empty rectangular sequences of rows."""
    if isinstance(value, np.ndarray):
        return value.ndim == 2
    if not _is_sequence(value) or len(value) == 0:
        return False
    if not all(_is_sequence(row) for row in value):
        return False
    return len({len(row) for row in value}) == 1


def _dimensions(grid: Any) -> tuple[int, int]:
    if isinstance(grid, np.ndarray):
        if grid.ndim != 2:
            raise TypeError(f"Expected a 2-D array, got {grid.ndim} dimension(s)")
        return grid.shape[0], grid.shape[1]
    rows = len(grid)
    if rows == 0:
        return 0, 0
    widths = {len(row) for row in grid}
    if len(widths) != 1:
        raise TypeError("Expected a rectangular grid, got rows of differing lengths")
    return rows, widths.pop()


class CollectionAssert:
    """Namespace of collection assertions."""

    @staticmethod
    def are_equal(expected: Iterable, actual: Iterable, message: str = "") -> None:
        """Compare two collections, picking the check from their shape.

        Two 2-D grids are compared cell by cell, two flat sequences element
        by element, anything else as generic iterables.
        """
        if _is_grid(expected) and _is_grid(actual):
            CollectionAssert.grid_equal(expected, actual, message)
        elif _is_sequence(expected) and _is_sequence(actual):
            CollectionAssert.array_equal(expected, actual, message)
        else:
            CollectionAssert.sequence_equal(expected, actual, message)

    @staticmethod
    def array_equal(expected: Sequence, actual: Sequence, message: str = "") -> None:
        # The length message ignores a custom message.
        if len(expected) != len(actual):
            raise AssertionFailed(
                f"Expected length of {len(expected)} but got {len(actual)}"
            )
        for i, (e, a) in enumerate(zip(expected, actual)):
            if not e == a:
                raise AssertionFailed(
                    message or f"Expected {render(e)} at i={i} but got {render(a)}"
                )

    @staticmethod
    def grid_equal(expected: Any, actual: Any, message: str = "") -> None:
        expected_rows, expected_cols = _dimensions(expected)
        actual_rows, actual_cols = _dimensions(actual)
        if (expected_rows, expected_cols) != (actual_rows, actual_cols):
            raise AssertionFailed(
                f"Expected dimensions of {expected_rows}x{expected_cols} "
                f"but got {actual_rows}x{actual_cols}"
            )
        for i in range(expected_rows):
            for j in range(expected_cols):
                e = expected[i][j]
                a = actual[i][j]
                if not e == a:
                    raise AssertionFailed(
                        message or f"Expected {render(e)} at {i},{j} but got {render(a)}"
                    )

    @staticmethod
    def sequence_equal(expected: Iterable, actual: Iterable, message: str = "") -> None:
        """Compare two iterables in order.

        Unlike the array and grid checks, the default message renders both
        sequences in full instead of pointing at the first mismatch.
        """
        expected_items = list(expected)
        actual_items = list(actual)
        if not message:
            message = (
                f"Expected {','.join(render(e) for e in expected_items)} "
                f"but got {','.join(render(a) for a in actual_items)}"
            )
        same = len(expected_items) == len(actual_items) and all(
            e == a for e, a in zip(expected_items, actual_items)
        )
        if not same:
            raise AssertionFailed(message)
