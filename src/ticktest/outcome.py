"""Data structures describing test cases and their outcomes."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING

if TYPE_CHECKING:
    from ticktest.metrics import CategoryTiming


class OutcomeStatus(str, Enum):
    PASSED = "passed"
    ASSERTION_FAILED = "assertion_failed"
    UNEXPECTED_FAULT = "unexpected_fault"


@dataclass(frozen=True)
class TestCase:
    """A named, zero-argument test procedure."""

    __test__ = False  # not a pytest test class

    name: str
    func: Callable[[], Any]


@dataclass(frozen=True)
class SourceLocation:
    """Where an unexpected fault was raised, as far as it could be recovered.

    Attributes:
        file: Path of the source file as recorded in the traceback.
        line: 1-based line number.
        function: Name of the function the fault was raised in.
        column: 1-based column, when the interpreter records one.
        code: The stripped source line, when it could be read.
    """

    file: str
    line: int
    function: str
    column: int | None = None
    code: str | None = None


@dataclass
class TestOutcome:
    """Result of running a single test case."""

    __test__ = False

    name: str
    status: OutcomeStatus
    message: str = ""
    fault_type: str | None = None
    location: SourceLocation | None = None
    duration_seconds: float = 0.0

    @property
    def passed(self) -> bool:
        return self.status is OutcomeStatus.PASSED

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        return data


@dataclass
class CategoryResult:
    """Outcomes of one category run, in execution order."""

    name: str
    outcomes: list[TestOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def pass_count(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def all_passed(self) -> bool:
        return self.pass_count == self.total

    def timing(self) -> CategoryTiming:
        from ticktest.metrics import category_timing

        return category_timing(self)
