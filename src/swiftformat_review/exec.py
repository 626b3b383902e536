"""Subprocess runner shared by the git and SwiftFormat collaborators."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecResult:
    """Captured outcome of one subprocess invocation."""

    argv: tuple[str, ...]
    cwd: Path
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Stdout when present, else stderr."""
        return self.stdout if self.stdout.strip() else self.stderr


class ExecError(RuntimeError):
    """Raised by ``run_command(check=True)`` on a non-zero exit."""

    def __init__(self, result: ExecResult):
        program = result.argv[0] if result.argv else "command"
        super().__init__(
            f"{program} exited {result.returncode} in {result.cwd}: "
            f"{' '.join(result.argv[1:])}\n{result.output.strip()}"
        )
        self.result = result


def run_command(
    argv: list[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
) -> ExecResult:
    """Run ``argv`` to completion in ``cwd`` (default: process cwd)."""
    workdir = (cwd or Path.cwd()).resolve()
    logger.debug("running %s in %s", " ".join(argv), workdir)
    completed = subprocess.run(argv, cwd=workdir, capture_output=True, text=True, check=False)
    result = ExecResult(
        argv=tuple(argv),
        cwd=workdir,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if check and not result.ok:
        raise ExecError(result)
    return result
