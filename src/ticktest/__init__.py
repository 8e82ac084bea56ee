"""Minimal unit-testing micro-framework: assertions plus a sequential runner."""

from ticktest.assertions import Assert, AssertionFailed, CollectionAssert
from ticktest.outcome import (
    CategoryResult,
    OutcomeStatus,
    SourceLocation,
    TestCase,
    TestOutcome,
)
from ticktest.runner import TestRunner, run_tests

__all__ = [
    "Assert",
    "AssertionFailed",
    "CategoryResult",
    "CollectionAssert",
    "OutcomeStatus",
    "SourceLocation",
    "TestCase",
    "TestOutcome",
    "TestRunner",
    "run_tests",
]
