"""SwiftFormat review checker."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol

from swiftformat_review.host import ReviewHost
from swiftformat_review.reporting import render_report
from swiftformat_review.selection import resolve_candidate_files
from swiftformat_review.swiftformat import SwiftFormat, SwiftFormatNotFoundError
from swiftformat_review.types import FAILURE_MESSAGE, CheckerConfig, FormatResults

logger = logging.getLogger(__name__)


class Formatter(Protocol):
    """Narrow formatter interface the checker drives."""

    command: tuple[str, ...]

    def installed(self) -> bool: ...

    def check_format(
        self,
        files: Sequence[str],
        additional_args: str | None = None,
        swift_version: str | None = None,
    ) -> FormatResults: ...


FormatterFactory = Callable[[CheckerConfig, Path], Formatter]


def _default_formatter(config: CheckerConfig, cwd: Path) -> Formatter:
    return SwiftFormat(config.binary_path, cwd=cwd)


class FormatChecker:
    """Runs SwiftFormat over the Swift files a change touches and reports issues."""

    def __init__(
        self,
        host: ReviewHost,
        config: CheckerConfig | None = None,
        *,
        formatter_factory: FormatterFactory | None = None,
        cwd: Path | None = None,
    ):
        self.host = host
        self.config = config or CheckerConfig()
        self.formatter_factory = formatter_factory or _default_formatter
        self.cwd = cwd or Path.cwd()

    def find_swift_files(self) -> list[str]:
        """Files on which SwiftFormat should run."""
        return resolve_candidate_files(self.host.changes(), self.config.exclude)

    def check_format(self, fail_on_error: bool = False) -> FormatResults | None:
        """Check formatting, emit a report when issues exist.

        Returns None when there was nothing to check.

        Raises:
            SwiftFormatNotFoundError: If SwiftFormat is not installed.
        """
        formatter = self.formatter_factory(self.config, self.cwd)
        if not formatter.installed():
            raise SwiftFormatNotFoundError(formatter.command)

        swift_files = self.find_swift_files()
        if not swift_files:
            logger.debug("no swift files in change")
            return None

        results = formatter.check_format(
            swift_files,
            self.config.additional_args,
            self.config.swift_version,
        )
        if not results.violations:
            logger.debug("swiftformat reported no issues across %d file(s)", len(swift_files))
            return results

        self.host.markdown(
            render_report(
                results.violations,
                cwd=self.cwd,
                additional_message=self.config.additional_message,
            )
        )

        if fail_on_error:
            self.host.fail(FAILURE_MESSAGE)

        return results
