from __future__ import annotations

import functools
import logging
import time
import traceback
from pathlib import Path
from typing import Any, Callable, Iterable, TextIO, Union

from ticktest.assertions.base import AssertionFailed
from ticktest.outcome import (
    CategoryResult,
    OutcomeStatus,
    SourceLocation,
    TestCase,
    TestOutcome,
)

TICK = "✔"
CROSS = "✘"

TestSpec = Union[TestCase, tuple[str, Callable[[], Any]], Callable[[], Any]]


def _derive_name(func: Callable[..., Any]) -> str:
    name = getattr(func, "__name__", None)
    if name:
        return name
    if isinstance(func, functools.partial):
        return _derive_name(func.func)
    return repr(func)


def as_test_cases(tests: Iterable[TestSpec]) -> list[TestCase]:
    """Normalize the accepted test forms into an ordered list of TestCase.

    Accepts ``TestCase`` objects, ``(name, callable)`` pairs and bare
    callables, whose display name is taken from ``__name__``.
    """
    cases: list[TestCase] = []
    for item in tests:
        if isinstance(item, TestCase):
            cases.append(item)
        elif isinstance(item, tuple):
            if len(item) != 2 or not callable(item[1]):
                raise TypeError(f"Expected a (name, callable) pair, got {item!r}")
            cases.append(TestCase(name=str(item[0]), func=item[1]))
        elif callable(item):
            cases.append(TestCase(name=_derive_name(item), func=item))
        else:
            raise TypeError(f"Not a test case: {item!r}")
    return cases


def _fault_location(exc: BaseException) -> SourceLocation | None:
    """Innermost traceback frame below the runner, or None if there is none."""
    # The first entry is the runner frame that caught the exception.
    frames = traceback.extract_tb(exc.__traceback__)[1:]
    if not frames:
        return None
    frame = frames[-1]
    if frame.lineno is None:
        return None
    colno = getattr(frame, "colno", None)
    return SourceLocation(
        file=frame.filename,
        line=frame.lineno,
        function=frame.name,
        column=colno + 1 if colno is not None else None,
        code=frame.line or None,
    )


def fault_details(outcome: TestOutcome) -> list[str]:
    """Location lines printed under an unexpected fault."""
    loc = outcome.location
    if loc is None:
        return ["  Location: unknown"]
    position = f"{loc.line}:{loc.column}" if loc.column is not None else str(loc.line)
    lines = [
        f"  Method: {loc.function}",
        f"    File: {Path(loc.file).name} @ {position}",
    ]
    if loc.code:
        lines.append(f"    Code: {loc.code}")
    return lines


class TestRunner:
    """Runs categories of test cases and prints a pass/fail report."""

    __test__ = False

    def __init__(
        self,
        stream: TextIO | None = None,
        logger: logging.Logger | None = None,
    ):
        self.stream = stream
        self.logger = logger or logging.getLogger("ticktest")

    def _emit(self, line: str = "") -> None:
        # stream=None prints to whatever sys.stdout is at call time
        print(line, file=self.stream)

    def run_category(self, name: str, tests: Iterable[TestSpec]) -> CategoryResult:
        """Run every test in order. One failing test never stops the others."""
        cases = as_test_cases(tests)
        result = CategoryResult(name=name)

        self._emit(f"=== Category: {name} ===")
        self.logger.debug(f"Starting category '{name}' with {len(cases)} test(s)")

        for index, case in enumerate(cases, start=1):
            self._emit(f"\tTest {index} of {len(cases)}: {case.name}")
            outcome = self._execute(case)
            self._report(outcome)
            result.outcomes.append(outcome)
            self.logger.debug(
                f"Test '{case.name}' {outcome.status.value} "
                f"in {outcome.duration_seconds:.4f}s"
                + (f": {outcome.message}" if outcome.message else "")
            )

        self._emit(f"\t==> {result.pass_count}/{result.total} <==\n")
        self.logger.debug(
            f"Category '{name}' completed: {result.pass_count}/{result.total} passed "
            f"in {result.timing().total:.4f}s"
        )
        return result

    def _execute(self, case: TestCase) -> TestOutcome:
        start = time.perf_counter()
        try:
            returned = case.func()
        except AssertionFailed as e:
            return TestOutcome(
                name=case.name,
                status=OutcomeStatus.ASSERTION_FAILED,
                message=e.message,
                duration_seconds=time.perf_counter() - start,
            )
        # sys.exit() in a test is a fault of that test; KeyboardInterrupt propagates
        except (Exception, SystemExit) as e:
            return TestOutcome(
                name=case.name,
                status=OutcomeStatus.UNEXPECTED_FAULT,
                message=str(e),
                fault_type=type(e).__name__,
                location=_fault_location(e),
                duration_seconds=time.perf_counter() - start,
            )
        duration = time.perf_counter() - start

        # A procedure may hand back the signal instead of raising it.
        if isinstance(returned, AssertionFailed):
            return TestOutcome(
                name=case.name,
                status=OutcomeStatus.ASSERTION_FAILED,
                message=returned.message,
                duration_seconds=duration,
            )
        return TestOutcome(
            name=case.name, status=OutcomeStatus.PASSED, duration_seconds=duration
        )

    def _report(self, outcome: TestOutcome) -> None:
        if outcome.status is OutcomeStatus.PASSED:
            self._emit(f"\t\t{TICK} Test passed")
        elif outcome.status is OutcomeStatus.ASSERTION_FAILED:
            self._emit(f"\t\t{CROSS} {outcome.message}")
        else:
            self._emit(f"\t\t{CROSS} {outcome.fault_type}: {outcome.message}")
            for line in fault_details(outcome):
                self._emit(f"\t\t{line}")


def run_tests(
    name: str,
    tests: Iterable[TestSpec],
    *,
    stream: TextIO | None = None,
    logger: logging.Logger | None = None,
) -> int:
    """Run a category of tests, print the report and return the pass count."""
    runner = TestRunner(stream=stream, logger=logger)
    return runner.run_category(name, tests).pass_count
