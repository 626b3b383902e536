"""SwiftFormat command-line wrapper."""

from __future__ import annotations

import logging
import re
import shlex
import shutil
from collections.abc import Sequence
from pathlib import Path

from swiftformat_review.exec import ExecResult, run_command
from swiftformat_review.types import FormatResults, Violation

logger = logging.getLogger(__name__)

DEFAULT_BINARY = "swiftformat"
SPM_COMMAND: tuple[str, ...] = ("swift", "run", "-c", "release", "swiftformat")
CHECK_FLAGS: tuple[str, ...] = ("--dryrun", "--verbose")

_RULES_APPLIED = re.compile(r"^(.*?) -- rules applied: (.*)$", re.MULTILINE)
_RUN_TIME = re.compile(r"SwiftFormat completed.*in (\d+\.\d+)s")


class SwiftFormatNotFoundError(RuntimeError):
    """Raised when no runnable SwiftFormat executable can be found."""

    def __init__(self, command: Sequence[str]):
        super().__init__(f"Could not find SwiftFormat executable (tried: {' '.join(command)})")
        self.command = tuple(command)


class SwiftFormatError(RuntimeError):
    """Raised when a SwiftFormat check pass exits non-zero."""

    def __init__(self, result: ExecResult):
        super().__init__(f"Error running SwiftFormat: Error: {result.output.strip()}")
        self.result = result


def resolve_command(binary_path: str | None = None, *, cwd: Path | None = None) -> tuple[str, ...]:
    """Pick the command that launches SwiftFormat.

    Order: explicit binary path, ``swiftformat`` on PATH, then the Swift
    Package Manager build when the working directory holds a Package.swift.
    """
    if binary_path:
        return (binary_path,)
    if shutil.which(DEFAULT_BINARY):
        return (DEFAULT_BINARY,)
    if ((cwd or Path.cwd()) / "Package.swift").exists():
        return SPM_COMMAND
    return (DEFAULT_BINARY,)


def parse_output(output: str) -> FormatResults:
    """Extract per-file rule hits and run time from verbose dry-run output."""
    violations = tuple(
        Violation(
            file=match.group(1).strip(),
            rules=tuple(rule.strip() for rule in match.group(2).split(",") if rule.strip()),
        )
        for match in _RULES_APPLIED.finditer(output)
    )
    run_time = _RUN_TIME.search(output)
    return FormatResults(
        violations=violations,
        run_time=run_time.group(1) if run_time else None,
        output=output,
    )


class SwiftFormat:
    """Runs SwiftFormat in non-mutating check mode."""

    def __init__(self, binary_path: str | None = None, *, cwd: Path | None = None):
        self.cwd = (cwd or Path.cwd()).resolve()
        self.command = resolve_command(binary_path, cwd=self.cwd)

    def installed(self) -> bool:
        """Probe the executable with ``--version``."""
        try:
            result = run_command([*self.command, "--version"], cwd=self.cwd, check=False)
        except OSError as exc:
            logger.debug("swiftformat probe failed: %s", exc)
            return False
        return result.returncode == 0

    def build_argv(
        self,
        files: Sequence[str],
        additional_args: str | None = None,
        swift_version: str | None = None,
    ) -> list[str]:
        argv = [*self.command, *files]
        if additional_args:
            argv.extend(shlex.split(additional_args))
        if swift_version:
            argv.extend(["--swiftversion", swift_version])
        argv.extend(CHECK_FLAGS)
        return argv

    def check_format(
        self,
        files: Sequence[str],
        additional_args: str | None = None,
        swift_version: str | None = None,
    ) -> FormatResults:
        """Dry-run SwiftFormat over ``files`` and parse the rules it would apply.

        Raises:
            SwiftFormatError: If SwiftFormat exits non-zero.
        """
        argv = self.build_argv(files, additional_args, swift_version)
        result = run_command(argv, cwd=self.cwd, check=False)
        if result.returncode != 0:
            raise SwiftFormatError(result)
        results = parse_output(result.output)
        logger.debug(
            "swiftformat checked %d file(s), %d with issues",
            len(files),
            len(results.violations),
        )
        return results
