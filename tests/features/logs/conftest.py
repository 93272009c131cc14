"""BDD step definitions for the log analysis feature."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, then, when

from hostwatch.core.exceptions import FileAccessError
from hostwatch.core.logs import LogAnalyzer
from hostwatch.core.models import LogLevel, LogStats


@dataclass
class LogScenarioContext:
    """Shared state between steps in a log analysis scenario."""

    path: Path
    stats: LogStats | None = None
    error: Exception | None = None


@pytest.fixture
def ctx(tmp_path: Path) -> LogScenarioContext:
    return LogScenarioContext(path=tmp_path / "app.log")


@given("a log file containing:")
def given_log_file(ctx: LogScenarioContext, docstring: str) -> None:
    ctx.path.write_text(docstring + "\n", encoding="utf-8")


@given(parsers.parse("a log file with {n:d} distinct error messages"))
def given_distinct_errors(ctx: LogScenarioContext, n: int) -> None:
    lines = [f"[ERROR] failure {i}" for i in range(n)]
    ctx.path.write_text("\n".join(lines) + "\n", encoding="utf-8")


@given("a log file that does not exist")
def given_missing_file(ctx: LogScenarioContext) -> None:
    ctx.path = ctx.path.with_name("missing.log")


@when("the log file is analyzed")
def when_analyzed(ctx: LogScenarioContext) -> None:
    try:
        ctx.stats = LogAnalyzer().analyze(ctx.path)
    except FileAccessError as err:
        ctx.error = err


@then(parsers.parse("the total entry count is {n:d}"))
def then_total(ctx: LogScenarioContext, n: int) -> None:
    assert ctx.stats.total_entries == n


@then(parsers.parse("the {level} level count is {n:d}"))
def then_level_count(ctx: LogScenarioContext, level: str, n: int) -> None:
    assert ctx.stats.level_counts.get(LogLevel(level), 0) == n


@then(parsers.parse('the top error is "{message}" with {n:d} occurrences'))
def then_top_error(ctx: LogScenarioContext, message: str, n: int) -> None:
    top = ctx.stats.top_errors[0]
    assert (top.message, top.count) == (message, n)


@then("no errors are ranked")
def then_no_errors(ctx: LogScenarioContext) -> None:
    assert ctx.stats.top_errors == []


@then(parsers.parse("{n:d} errors are ranked"))
def then_errors_ranked(ctx: LogScenarioContext, n: int) -> None:
    assert len(ctx.stats.top_errors) == n


@then("a file access error is reported")
def then_file_access_error(ctx: LogScenarioContext) -> None:
    assert isinstance(ctx.error, FileAccessError)
    assert ctx.stats is None
