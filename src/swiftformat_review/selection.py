"""Candidate file selection for a change."""

from __future__ import annotations

from collections.abc import Sequence
from fnmatch import fnmatch

from swiftformat_review.types import SWIFT_EXTENSION, ChangeSet


def resolve_candidate_files(
    changes: ChangeSet,
    exclude: Sequence[str] | None = None,
    *,
    extension: str = SWIFT_EXTENSION,
) -> list[str]:
    """Return the sorted, deduplicated source files a change touches.

    Modified files are followed through renames, files the host also lists as
    deleted are dropped, added files are included as-is. The result keeps only
    paths ending in ``extension`` and not matching any ``exclude`` glob.
    """
    renamed = {rename.before: rename.after for rename in changes.renamed}
    post_rename_modified = [renamed.get(path, path) for path in changes.modified]

    # A path listed as both modified and deleted is dropped.
    deleted = set(changes.deleted)
    files = [path for path in post_rename_modified if path not in deleted]
    files.extend(changes.added)

    patterns = tuple(exclude or ())
    return sorted(
        {
            path
            for path in files
            if path.endswith(extension) and not any(fnmatch(path, glob) for glob in patterns)
        }
    )
