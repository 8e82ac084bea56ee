"""Assertion system for test procedures."""

from ticktest.assertions.base import AssertionFailed
from ticktest.assertions.sequences import CollectionAssert
from ticktest.assertions.values import Assert

__all__ = ["Assert", "AssertionFailed", "CollectionAssert"]
