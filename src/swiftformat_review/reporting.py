"""Markdown report rendering."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from swiftformat_review.types import REPORT_HEADER, Violation


def relative_path(path: str, cwd: Path | str) -> str:
    """Strip the working directory prefix from ``path`` when present."""
    prefix = f"{str(cwd).rstrip('/')}/"
    return path[len(prefix):] if path.startswith(prefix) else path


def unique_violations(violations: Iterable[Violation]) -> list[Violation]:
    """Collapse duplicate records, keeping first-seen order."""
    return list(dict.fromkeys(violations))


def render_report(
    violations: Iterable[Violation],
    *,
    cwd: Path | str,
    additional_message: str | None = None,
) -> str:
    """Render the review comment table for ``violations``."""
    lines = [
        REPORT_HEADER,
        "",
        "| File | Rules |",
        "| ---- | ----- |",
    ]
    for violation in unique_violations(violations):
        lines.append(f"| {relative_path(violation.file, cwd)} | {', '.join(violation.rules)} |")

    message = "\n".join(lines) + "\n"
    if additional_message is not None:
        message += "\n" + additional_message
    return message
