from __future__ import annotations

from pathlib import Path

from junitparser import Error, Failure, JUnitXml, TestSuite
from junitparser import TestCase as JUnitCase

from ticktest.outcome import CategoryResult, OutcomeStatus
from ticktest.runner import fault_details


def build_suite(result: CategoryResult) -> TestSuite:
    """Convert one category result into a JUnit test suite."""
    suite = TestSuite(result.name)
    suite.add_property("pass_count", str(result.pass_count))

    timing = result.timing()
    for stat_name, stat_val in timing.per_test().items():
        suite.add_property(f"duration_{stat_name}", str(stat_val))
    if timing.slowest_test is not None:
        suite.add_property("slowest_test", timing.slowest_test)

    for outcome in result.outcomes:
        case = JUnitCase(outcome.name)
        case.classname = result.name
        case.time = round(outcome.duration_seconds, 6)
        if outcome.status is OutcomeStatus.ASSERTION_FAILED:
            case.result = [Failure(outcome.message)]
        elif outcome.status is OutcomeStatus.UNEXPECTED_FAULT:
            error = Error(outcome.message, outcome.fault_type)
            error.text = "\n".join(line.strip() for line in fault_details(outcome))
            case.result = [error]
        suite.add_testcase(case)

    # An empty category never went through add_testcase
    suite.update_statistics()
    # Set time after add_testcase (add_testcase resets it via update_statistics)
    suite.time = timing.total
    return suite


def write_junit(path: Path, results: list[CategoryResult]) -> Path:
    """Write junit.xml for the given category results, return path."""
    xml = JUnitXml()
    for result in results:
        # Use append (not +=) to preserve properties and time
        xml.append(build_suite(result))

    path.parent.mkdir(parents=True, exist_ok=True)
    xml.write(str(path), pretty=True)
    return path
