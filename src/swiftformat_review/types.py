"""Domain types for swiftformat review runs."""

from __future__ import annotations

from dataclasses import dataclass, field

SWIFT_EXTENSION = ".swift"
REPORT_HEADER = "### SwiftFormat found issues:"
FAILURE_MESSAGE = "SwiftFormat found issues"


@dataclass(frozen=True)
class CheckerConfig:
    """Caller-supplied knobs for one checker instance."""

    binary_path: str | None = None
    additional_args: str | None = None
    additional_message: str | None = None
    exclude: tuple[str, ...] = ()
    swift_version: str | None = None


@dataclass(frozen=True)
class Rename:
    """One renamed file in a change."""

    before: str
    after: str


@dataclass(frozen=True)
class ChangeSet:
    """File-level differences under review, as reported by the host."""

    modified: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()
    renamed: tuple[Rename, ...] = ()


@dataclass(frozen=True)
class Violation:
    """Formatting rules a single file breaks."""

    file: str
    rules: tuple[str, ...]


@dataclass(frozen=True)
class FormatResults:
    """Parsed outcome of a formatter check pass."""

    violations: tuple[Violation, ...] = ()
    run_time: str | None = None
    output: str = field(default="", repr=False)
