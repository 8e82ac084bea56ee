from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ticktest.outcome import TestCase


class CaseRef(BaseModel):
    """One test function of a category, optionally with a display name."""

    model_config = ConfigDict(extra="forbid")
    function: str
    name: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or self.function


class CategoryConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    module: str
    tests: list[CaseRef]

    @field_validator("tests", mode="before")
    @classmethod
    def normalize_tests(cls, v: list) -> list:
        result = []
        for item in v or []:
            if isinstance(item, str):
                result.append(CaseRef(function=item))
            elif isinstance(item, dict):
                result.append(CaseRef(**item))
            else:
                result.append(item)
        return result

    @field_validator("tests")
    @classmethod
    def tests_must_not_be_empty(cls, v: list[CaseRef]) -> list[CaseRef]:
        if not v:
            raise ValueError("tests must not be empty")
        return v


class SuiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    python_path: list[str] = []
    categories: list[CategoryConfig]

    @field_validator("python_path")
    @classmethod
    def expand_python_path(cls, v: list[str]) -> list[str]:
        """Expand ${VAR} and ${VAR:-default} references.

        Raises ValueError listing every unset variable without a default.
        """
        expanded: list[str] = []
        missing: list[str] = []
        for entry in v:
            try:
                expanded.append(expandvars(entry, nounset=True))
            except Exception:
                missing.append(f"  {entry}")
        if missing:
            details = "\n".join(missing)
            raise ValueError(f"python_path has missing environment variables:\n{details}")
        return expanded

    @model_validator(mode="after")
    def categories_must_be_unique(self) -> SuiteConfig:
        if not self.categories:
            raise ValueError("categories must not be empty")
        seen: set[str] = set()
        for category in self.categories:
            if category.name in seen:
                raise ValueError(f"Duplicate category name '{category.name}'")
            seen.add(category.name)
        return self


def load_config(path: Path) -> SuiteConfig:
    """Load and validate a suite config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = SuiteConfig.model_validate(raw)

    # Resolve relative paths relative to config file location
    config.python_path = [
        str(p if Path(p).is_absolute() else (config_dir / p).resolve())
        for p in config.python_path
    ]
    for category in config.categories:
        module_path = Path(category.module)
        if category.module.endswith(".py") and not module_path.is_absolute():
            category.module = str((config_dir / module_path).resolve())

    return config


def activate_python_path(config: SuiteConfig) -> None:
    """Prepend the configured python_path entries to sys.path, keeping their order."""
    for entry in reversed(config.python_path):
        if entry not in sys.path:
            sys.path.insert(0, entry)


def import_test_module(module: str) -> ModuleType:
    """Import a test module by dotted name or by path to a .py file."""
    if not module.endswith(".py"):
        return importlib.import_module(module)

    path = Path(module)
    if not path.is_file():
        raise ValueError(f"Test module not found: {module}")
    module_name = f"ticktest_suite_{path.stem}"
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Cannot load test module: {module}")
    loaded = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = loaded
    spec.loader.exec_module(loaded)
    return loaded


def resolve_category(category: CategoryConfig) -> list[TestCase]:
    """Look up the listed test functions of a category, in listed order."""
    module = import_test_module(category.module)
    cases: list[TestCase] = []
    for ref in category.tests:
        func = getattr(module, ref.function, None)
        if func is None:
            raise ValueError(
                f"Category '{category.name}': module '{category.module}' "
                f"has no function '{ref.function}'"
            )
        if not callable(func):
            raise ValueError(
                f"Category '{category.name}': '{ref.function}' is not callable"
            )
        cases.append(TestCase(name=ref.display_name, func=func))
    return cases
