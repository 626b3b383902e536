"""Build a ChangeSet from git history."""

from __future__ import annotations

import logging
from pathlib import Path

from swiftformat_review.exec import ExecError, run_command
from swiftformat_review.types import ChangeSet, Rename

logger = logging.getLogger(__name__)


def parse_name_status(output: str) -> ChangeSet:
    """Parse ``git diff --name-status -M -z`` output into a ChangeSet.

    Renamed files are recorded both as a rename and as a modification of the
    pre-rename path, the way review hosts report them. Copies count as added
    files and type changes as modifications.
    """
    modified: list[str] = []
    added: list[str] = []
    deleted: list[str] = []
    renamed: list[Rename] = []

    tokens = [token for token in output.split("\0") if token]
    index = 0
    while index < len(tokens):
        status = tokens[index]
        kind = status[:1]
        if kind in ("R", "C"):
            if index + 2 >= len(tokens):
                raise RuntimeError(f"truncated git name-status entry: {status}")
            before, after = tokens[index + 1], tokens[index + 2]
            index += 3
            if kind == "R":
                renamed.append(Rename(before=before, after=after))
                modified.append(before)
            else:
                added.append(after)
            continue

        if index + 1 >= len(tokens):
            raise RuntimeError(f"truncated git name-status entry: {status}")
        path = tokens[index + 1]
        index += 2
        if kind == "A":
            added.append(path)
        elif kind == "D":
            deleted.append(path)
        elif kind in ("M", "T"):
            modified.append(path)
        else:
            logger.debug("ignoring git status %s for %s", status, path)

    return ChangeSet(
        modified=tuple(modified),
        added=tuple(added),
        deleted=tuple(deleted),
        renamed=tuple(renamed),
    )


def _git(args: list[str], repo_root: Path) -> str:
    return run_command(["git", *args], cwd=repo_root).stdout


def resolve_repo_root(path: Path | None = None) -> Path:
    """Top-level directory of the git work tree containing ``path``.

    Diff paths are relative to this directory, so SwiftFormat and the config
    lookup must run from it rather than from a subdirectory.
    """
    probe = (path or Path.cwd()).resolve()
    try:
        root = _git(["rev-parse", "--show-toplevel"], probe).strip()
    except ExecError as exc:
        raise RuntimeError(f"not inside a git work tree: {probe}\n{exc}") from exc
    if not root:
        raise RuntimeError(f"not inside a git work tree: {probe}")
    return Path(root).resolve()


def ensure_head_checked_out(repo_root: Path, head: str) -> None:
    """Refuse a ``head`` that is not the checked-out commit.

    SwiftFormat reads the working tree, so checking any other commit's change
    list would report on the wrong file contents.
    """
    wanted = _git(["rev-parse", "--verify", f"{head}^{{commit}}"], repo_root).strip()
    current = _git(["rev-parse", "--verify", "HEAD^{commit}"], repo_root).strip()
    if wanted != current:
        raise RuntimeError(
            f"head {head} ({wanted[:12]}) is not checked out (HEAD is {current[:12]}); "
            f"run `git checkout {head}` first"
        )


def changes_between(repo_root: Path, base: str, head: str = "HEAD") -> ChangeSet:
    """Collect file changes introduced on ``head`` since it forked from ``base``."""
    changes = parse_name_status(_git(["diff", "--name-status", "-M", "-z", f"{base}...{head}"], repo_root))
    logger.debug(
        "changes %s...%s: %d modified, %d added, %d deleted, %d renamed",
        base,
        head,
        len(changes.modified),
        len(changes.added),
        len(changes.deleted),
        len(changes.renamed),
    )
    return changes
