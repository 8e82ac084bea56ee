from __future__ import annotations

from pathlib import Path

import typer

app = typer.Typer(name="ticktest", help="Run named test categories and report pass/fail")


@app.command()
def run(
    config: str = typer.Argument(help="Path to suite YAML config"),
    category: str | None = typer.Option(None, help="Run only this category"),
    junit: str | None = typer.Option(None, help="Write a JUnit XML report to this path"),
    debug_log: str | None = typer.Option(
        None, "--debug-log", help="Append debug output to this file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output to terminal"
    ),
):
    """Run the categories of a suite config in file order."""
    import yaml
    from pydantic import ValidationError

    from ticktest.config import activate_python_path, load_config, resolve_category
    from ticktest.runner import TestRunner
    from ticktest.verbose import setup_logger

    config_path = Path(config)
    if not config_path.exists():
        typer.echo(f"Error: config file not found: {config}", err=True)
        raise typer.Exit(1)

    try:
        suite = load_config(config_path)
    except (ValidationError, yaml.YAMLError) as e:
        typer.echo(f"Error: invalid config {config}:\n{e}", err=True)
        raise typer.Exit(1)

    categories = suite.categories
    if category:
        categories = [c for c in categories if c.name == category]
        if not categories:
            typer.echo(f"Error: no category named '{category}' in {config}", err=True)
            raise typer.Exit(1)

    logger = setup_logger(
        Path(debug_log) if debug_log else None,
        verbose=verbose,
        logger_name="ticktest_main",
    )
    logger.debug(f"Loaded {len(categories)} category(ies) from {config_path}")

    activate_python_path(suite)
    runner = TestRunner(logger=logger)

    results = []
    for category_config in categories:
        try:
            cases = resolve_category(category_config)
        except (ImportError, ValueError) as e:
            typer.echo(f"Error: {e}", err=True)
            logger.error(f"Could not load category '{category_config.name}': {e}")
            raise typer.Exit(1)
        results.append(runner.run_category(category_config.name, cases))

    passed = sum(r.pass_count for r in results)
    total = sum(r.total for r in results)
    typer.echo(f"Total: {passed}/{total} tests passed")

    if junit:
        from ticktest.reporting.junit import write_junit

        junit_path = write_junit(Path(junit), results)
        typer.echo(f"JUnit report: {junit_path}")

    if passed != total:
        raise typer.Exit(1)


_EXAMPLE_CONFIG = """\
categories:
  - name: Divide
    module: divide_tests.py
    tests:
      - name: Divide by zero
        function: test_divide_denominator_zero
      - name: Positive numbers
        function: test_divide_positive_numbers
      - name: Negative numbers
        function: test_divide_negative_numbers
"""

_EXAMPLE_TESTS = '''\
import random

from ticktest import Assert


def divide(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError(f"Cannot divide {a} by zero!")
    return a / b


def test_divide_positive_numbers():
    rng = random.Random()
    for _ in range(100):
        numerator = rng.random() * 1000
        denominator = rng.random() * 1000 + 1
        expected = numerator / denominator
        actual = divide(numerator, denominator)
        Assert.are_equal(
            expected,
            actual,
            f"Expected {expected} for divide({numerator},{denominator}), but got {actual}",
        )


def test_divide_negative_numbers():
    rng = random.Random()
    for _ in range(100):
        numerator = rng.random() * 1000 - 1000
        denominator = rng.random() * 1000 - 1001
        Assert.are_equal(numerator / denominator, divide(numerator, denominator))


def test_divide_denominator_zero():
    try:
        result = divide(1, 0)
    except ZeroDivisionError as e:
        Assert.are_equal("Cannot divide 1 by zero!", str(e))
    except Exception as e:
        Assert.fail(f"Expected ZeroDivisionError but got {type(e).__name__}")
    else:
        Assert.fail(f"Expected ZeroDivisionError but got return value: {result}")
'''


@app.command()
def init(
    dir: str = typer.Option(
        "ticktest", "--dir", help="Directory to initialize the suite in"
    ),
):
    """Initialize a new suite with an example config and test module."""
    project_dir = Path(dir)

    # Create the project directory if it doesn't exist
    if not project_dir.exists():
        project_dir.mkdir(parents=True, exist_ok=True)

    example = project_dir / "ticktest.yaml"
    if example.exists():
        typer.echo(f"ticktest.yaml already exists in {dir}, skipping.")
        return

    example.write_text(_EXAMPLE_CONFIG)
    (project_dir / "divide_tests.py").write_text(_EXAMPLE_TESTS)

    typer.echo(f"Initialized suite in {dir}:")
    typer.echo("  ticktest.yaml    - example suite config")
    typer.echo("  divide_tests.py  - example test module")
