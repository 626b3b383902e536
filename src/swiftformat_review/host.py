"""Review host collaborators."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markdown import Markdown

from swiftformat_review.changeset import changes_between
from swiftformat_review.types import ChangeSet

logger = logging.getLogger(__name__)


class ReviewHost(Protocol):
    """What the checker needs from the review-automation host."""

    def changes(self) -> ChangeSet: ...

    def markdown(self, text: str) -> None: ...

    def fail(self, message: str) -> None: ...


class ConsoleHost:
    """Local host: git diff for changes, rich console for comments."""

    def __init__(
        self,
        *,
        repo_root: Path,
        base: str,
        head: str = "HEAD",
        console: Console | None = None,
        report_path: Path | None = None,
    ):
        self.repo_root = repo_root.resolve()
        self.base = base
        self.head = head
        self.console = console or Console()
        self.report_path = report_path
        self.messages: list[str] = []
        self.failures: list[str] = []

    def changes(self) -> ChangeSet:
        return changes_between(self.repo_root, self.base, self.head)

    def markdown(self, text: str) -> None:
        self.messages.append(text)
        self.console.print(Markdown(text))
        if self.report_path is not None:
            self.report_path.parent.mkdir(parents=True, exist_ok=True)
            self.report_path.write_text("\n".join(self.messages), encoding="utf-8")
            logger.debug("wrote report to %s", self.report_path)

    def fail(self, message: str) -> None:
        self.failures.append(message)
        self.console.print(f"[bold red]Failed:[/bold red] {message}")

    @property
    def failed(self) -> bool:
        return bool(self.failures)
