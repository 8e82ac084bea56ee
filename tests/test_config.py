"""Tests for suite config loading, validation and test resolution."""

import sys
import textwrap
from pathlib import Path

import pytest
from pydantic import ValidationError

from ticktest.config import (
    CaseRef,
    activate_python_path,
    import_test_module,
    load_config,
    resolve_category,
)
from ticktest.runner import TestRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
DEMO_CONFIG = REPO_ROOT / "examples" / "demo" / "ticktest.yaml"

TESTS_MODULE = """\
from ticktest import Assert

def test_ok():
    Assert.are_equal(2, 1 + 1)

def test_bad():
    Assert.fail("bad")

NOT_CALLABLE = 3
"""


@pytest.fixture()
def tmp_yaml(tmp_path):
    """Helper that writes YAML content to a temp file and returns its path."""

    def _write(content: str) -> Path:
        p = tmp_path / "ticktest.yaml"
        p.write_text(textwrap.dedent(content))
        return p

    return _write


@pytest.fixture()
def restore_sys_path(monkeypatch):
    monkeypatch.setattr(sys, "path", list(sys.path))


def test_load_minimal_config(tmp_yaml, tmp_path):
    path = tmp_yaml("""\
        categories:
          - name: Basics
            module: basics_tests.py
            tests:
              - test_ok
    """)
    cfg = load_config(path)

    assert cfg.python_path == []
    assert len(cfg.categories) == 1
    category = cfg.categories[0]
    assert category.name == "Basics"
    assert category.module == str((tmp_path / "basics_tests.py").resolve())
    assert [t.model_dump() for t in category.tests] == [
        {"function": "test_ok", "name": None}
    ]


def test_string_and_mapping_test_refs(tmp_yaml):
    path = tmp_yaml("""\
        categories:
          - name: Mixed
            module: some.module
            tests:
              - test_plain
              - name: Pretty name
                function: test_named
    """)
    tests = load_config(path).categories[0].tests

    assert tests[0] == CaseRef(function="test_plain")
    assert tests[0].display_name == "test_plain"
    assert tests[1].display_name == "Pretty name"


def test_dotted_module_is_not_resolved_as_path(tmp_yaml):
    path = tmp_yaml("""\
        categories:
          - name: Dotted
            module: package.tests_module
            tests: [test_a]
    """)
    assert load_config(path).categories[0].module == "package.tests_module"


def test_empty_categories_rejected(tmp_yaml):
    path = tmp_yaml("categories: []\n")
    with pytest.raises(ValidationError, match="categories must not be empty"):
        load_config(path)


def test_missing_categories_rejected(tmp_yaml):
    path = tmp_yaml("python_path: []\n")
    with pytest.raises(ValidationError):
        load_config(path)


@pytest.mark.parametrize("content", ["- Divide\n- Matrix\n", "just a string\n", "42\n"])
def test_non_mapping_top_level_rejected(tmp_yaml, content):
    path = tmp_yaml(content)
    with pytest.raises(ValidationError):
        load_config(path)


def test_empty_tests_rejected(tmp_yaml):
    path = tmp_yaml("""\
        categories:
          - name: Nothing
            module: m
            tests: []
    """)
    with pytest.raises(ValidationError, match="tests must not be empty"):
        load_config(path)


def test_duplicate_category_names_rejected(tmp_yaml):
    path = tmp_yaml("""\
        categories:
          - name: Same
            module: a
            tests: [t]
          - name: Same
            module: b
            tests: [t]
    """)
    with pytest.raises(ValidationError, match="Duplicate category name 'Same'"):
        load_config(path)


def test_unknown_keys_rejected(tmp_yaml):
    path = tmp_yaml("""\
        categories:
          - name: Extra
            module: m
            tests: [t]
            fixtures: [setup]
    """)
    with pytest.raises(ValidationError):
        load_config(path)


def test_python_path_expands_env_vars(tmp_yaml, tmp_path, monkeypatch):
    monkeypatch.setenv("TICKTEST_SRC", "src")
    path = tmp_yaml("""\
        python_path:
          - ${TICKTEST_SRC}/lib
          - ${TICKTEST_UNSET_WITH_DEFAULT:-vendor}
        categories:
          - name: Env
            module: m
            tests: [t]
    """)
    cfg = load_config(path)

    assert cfg.python_path == [
        str((tmp_path / "src" / "lib").resolve()),
        str((tmp_path / "vendor").resolve()),
    ]


def test_python_path_missing_env_var_rejected(tmp_yaml, monkeypatch):
    monkeypatch.delenv("TICKTEST_DEFINITELY_UNSET", raising=False)
    path = tmp_yaml("""\
        python_path:
          - ${TICKTEST_DEFINITELY_UNSET}/src
        categories:
          - name: Env
            module: m
            tests: [t]
    """)
    with pytest.raises(ValidationError, match="missing environment variables"):
        load_config(path)


def test_activate_python_path_prepends_in_order(tmp_yaml, restore_sys_path):
    path = tmp_yaml("""\
        python_path: [first, second]
        categories:
          - name: P
            module: m
            tests: [t]
    """)
    cfg = load_config(path)
    activate_python_path(cfg)
    activate_python_path(cfg)

    assert sys.path[:2] == cfg.python_path
    assert sys.path.count(cfg.python_path[0]) == 1


def test_resolve_category_from_file(tmp_yaml, tmp_path):
    (tmp_path / "basics_tests.py").write_text(TESTS_MODULE)
    path = tmp_yaml("""\
        categories:
          - name: Basics
            module: basics_tests.py
            tests:
              - name: Fails first
                function: test_bad
              - test_ok
    """)
    cases = resolve_category(load_config(path).categories[0])

    assert [c.name for c in cases] == ["Fails first", "test_ok"]
    assert cases[1].func() is None


def test_resolve_category_from_dotted_module(tmp_yaml, tmp_path, restore_sys_path):
    pkg = tmp_path / "ticktest_cfg_pkg"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("")
    (pkg / "dotted_tests.py").write_text(TESTS_MODULE)
    path = tmp_yaml("""\
        python_path: ["."]
        categories:
          - name: Dotted
            module: ticktest_cfg_pkg.dotted_tests
            tests: [test_ok]
    """)
    cfg = load_config(path)
    activate_python_path(cfg)

    cases = resolve_category(cfg.categories[0])
    assert [c.name for c in cases] == ["test_ok"]


def test_resolve_category_missing_function(tmp_yaml, tmp_path):
    (tmp_path / "basics_tests.py").write_text(TESTS_MODULE)
    path = tmp_yaml("""\
        categories:
          - name: Basics
            module: basics_tests.py
            tests: [test_missing]
    """)
    with pytest.raises(ValueError, match="has no function 'test_missing'"):
        resolve_category(load_config(path).categories[0])


def test_resolve_category_not_callable(tmp_yaml, tmp_path):
    (tmp_path / "basics_tests.py").write_text(TESTS_MODULE)
    path = tmp_yaml("""\
        categories:
          - name: Basics
            module: basics_tests.py
            tests: [NOT_CALLABLE]
    """)
    with pytest.raises(ValueError, match="is not callable"):
        resolve_category(load_config(path).categories[0])


def test_import_test_module_missing_file(tmp_path):
    with pytest.raises(ValueError, match="Test module not found"):
        import_test_module(str(tmp_path / "absent_tests.py"))


def test_import_test_module_missing_dotted_module():
    with pytest.raises(ImportError):
        import_test_module("ticktest_no_such_module_anywhere")


def test_demo_config_loads_and_runs(stream, restore_sys_path):
    cfg = load_config(DEMO_CONFIG)
    activate_python_path(cfg)
    runner = TestRunner(stream=stream)

    results = [runner.run_category(c.name, resolve_category(c)) for c in cfg.categories]

    assert [r.name for r in results] == ["Divide", "Matrix"]
    assert all(r.all_passed for r in results)
    assert "\tTest 1 of 3: Divide by zero" in stream.getvalue()
    assert "\tTest 1 of 3: test_identity_is_neutral" in stream.getvalue()
