"""Unit tests for the FormatChecker pipeline."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from swiftformat_review.checker import FormatChecker
from swiftformat_review.swiftformat import SwiftFormatNotFoundError
from swiftformat_review.types import CheckerConfig, ChangeSet, FormatResults, Rename, Violation


class _Host:
    def __init__(self, changes: ChangeSet):
        self._changes = changes
        self.messages: list[str] = []
        self.failures: list[str] = []

    def changes(self) -> ChangeSet:
        return self._changes

    def markdown(self, text: str) -> None:
        self.messages.append(text)

    def fail(self, message: str) -> None:
        self.failures.append(message)


class _Formatter:
    command = ("swiftformat",)

    def __init__(self, results: FormatResults | None = None, *, installed: bool = True):
        self.results = results or FormatResults()
        self._installed = installed
        self.calls: list[tuple[list[str], str | None, str | None]] = []

    def installed(self) -> bool:
        return self._installed

    def check_format(
        self,
        files: Sequence[str],
        additional_args: str | None = None,
        swift_version: str | None = None,
    ) -> FormatResults:
        self.calls.append((list(files), additional_args, swift_version))
        return self.results


def _checker(
    changes: ChangeSet,
    formatter: _Formatter,
    config: CheckerConfig | None = None,
) -> tuple[FormatChecker, _Host]:
    host = _Host(changes)
    checker = FormatChecker(
        host,
        config,
        formatter_factory=lambda _config, _cwd: formatter,
        cwd=Path("/repo"),
    )
    return checker, host


_ONE_ISSUE = FormatResults(violations=(Violation(file="/repo/Foo.swift", rules=("spacing",)),))


def test_missing_formatter_raises_before_reporting() -> None:
    formatter = _Formatter(_ONE_ISSUE, installed=False)
    checker, host = _checker(ChangeSet(modified=("Foo.swift",)), formatter)

    with pytest.raises(SwiftFormatNotFoundError, match="Could not find SwiftFormat executable"):
        checker.check_format(fail_on_error=True)

    assert formatter.calls == []
    assert host.messages == []
    assert host.failures == []


@pytest.mark.parametrize("fail_on_error", [False, True])
def test_no_swift_files_short_circuits(fail_on_error: bool) -> None:
    formatter = _Formatter(_ONE_ISSUE)
    checker, host = _checker(ChangeSet(modified=("README.md",), added=("Makefile",)), formatter)

    assert checker.check_format(fail_on_error=fail_on_error) is None
    assert formatter.calls == []
    assert host.messages == []
    assert host.failures == []


def test_clean_run_emits_nothing() -> None:
    formatter = _Formatter(FormatResults())
    checker, host = _checker(ChangeSet(added=("Foo.swift",)), formatter)

    results = checker.check_format(fail_on_error=True)

    assert results is not None
    assert results.violations == ()
    assert host.messages == []
    assert host.failures == []


def test_issues_reported_without_failure_by_default() -> None:
    formatter = _Formatter(_ONE_ISSUE)
    checker, host = _checker(ChangeSet(modified=("Foo.swift",)), formatter)

    checker.check_format()

    assert host.messages == [
        "### SwiftFormat found issues:\n\n| File | Rules |\n| ---- | ----- |\n| Foo.swift | spacing |\n"
    ]
    assert host.failures == []


def test_fail_on_error_reports_and_fails() -> None:
    formatter = _Formatter(_ONE_ISSUE)
    checker, host = _checker(ChangeSet(modified=("Foo.swift",)), formatter)

    checker.check_format(fail_on_error=True)

    assert len(host.messages) == 1
    assert "| Foo.swift | spacing |" in host.messages[0]
    assert host.failures == ["SwiftFormat found issues"]


def test_config_flows_to_formatter_and_report() -> None:
    formatter = _Formatter(_ONE_ISSUE)
    config = CheckerConfig(
        additional_args="--indent 2",
        additional_message="Please fix",
        exclude=("Generated/*",),
        swift_version="5.9",
    )
    changes = ChangeSet(
        modified=("Old.swift", "Generated/Api.swift"),
        added=("Foo.swift",),
        renamed=(Rename(before="Old.swift", after="New.swift"),),
    )
    checker, host = _checker(changes, formatter, config)

    checker.check_format()

    assert formatter.calls == [(["Foo.swift", "New.swift"], "--indent 2", "5.9")]
    assert host.messages[0].endswith("\n\nPlease fix")


def test_find_swift_files_uses_host_changes_and_exclude() -> None:
    checker, _host = _checker(
        ChangeSet(modified=("b.swift", "skip/c.swift"), added=("a.swift",)),
        _Formatter(),
        CheckerConfig(exclude=("skip/*",)),
    )

    assert checker.find_swift_files() == ["a.swift", "b.swift"]
