"""swiftformat-review CLI."""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from swiftformat_review import __version__
from swiftformat_review.changeset import ensure_head_checked_out, resolve_repo_root
from swiftformat_review.checker import FormatChecker
from swiftformat_review.config import ReviewSettings, load_settings
from swiftformat_review.host import ConsoleHost
from swiftformat_review.selection import resolve_candidate_files

cli = typer.Typer(
    name="swiftformat-review",
    help="Report SwiftFormat issues in the Swift files a change touches.",
    no_args_is_help=True,
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _abort(exc: Exception) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
    return typer.Exit(2)


def _load(repo: Path, config: Path | None) -> tuple[Path, ReviewSettings]:
    try:
        repo_root = resolve_repo_root(repo)
        return repo_root, load_settings(repo_root, config)
    except RuntimeError as exc:
        raise _abort(exc) from exc


@cli.command("check")
def check(
    base: str = typer.Option("main", "--base", help="Ref the change is compared against."),
    head: str = typer.Option(
        "HEAD",
        "--head",
        help="Ref holding the change; must be the checked-out commit.",
    ),
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        help="Any path inside the repository (defaults to current working directory).",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (defaults to .swiftformat-review.yml in the repo).",
    ),
    binary_path: str | None = typer.Option(None, "--binary-path", help="Path to the SwiftFormat executable."),
    additional_args: str | None = typer.Option(
        None,
        "--additional-args",
        help="Extra SwiftFormat arguments, shell-quoted.",
    ),
    additional_message: str | None = typer.Option(
        None,
        "--additional-message",
        help="Text appended after the report table.",
    ),
    exclude: list[str] = typer.Option(
        [],
        "--exclude",
        help="Glob of files to skip; repeatable.",
    ),
    swift_version: str | None = typer.Option(None, "--swift-version", help="Project Swift version."),
    fail_on_error: bool = typer.Option(
        False,
        "--fail-on-error",
        help="Exit 1 when SwiftFormat finds issues.",
    ),
    report: Path | None = typer.Option(None, "--report", help="Also write the markdown report here."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Check formatting of Swift files changed between BASE and HEAD."""
    _configure_logging(verbose)
    repo_root, settings = _load(repo, config)
    settings = settings.with_overrides(
        binary_path=binary_path,
        additional_args=additional_args,
        additional_message=additional_message,
        exclude=exclude,
        swift_version=swift_version,
        fail_on_error=True if fail_on_error else None,
    )

    host = ConsoleHost(repo_root=repo_root, base=base, head=head, console=console, report_path=report)
    checker = FormatChecker(host, settings.checker, cwd=repo_root)
    try:
        ensure_head_checked_out(repo_root, head)
        results = checker.check_format(fail_on_error=settings.fail_on_error)
    except RuntimeError as exc:
        raise _abort(exc) from exc

    if host.failed:
        raise typer.Exit(1)
    if results is None or not results.violations:
        console.print("[green]✓ No SwiftFormat issues[/green]")


@cli.command("files")
def files(
    base: str = typer.Option("main", "--base", help="Ref the change is compared against."),
    head: str = typer.Option("HEAD", "--head", help="Ref holding the change."),
    repo: Path = typer.Option(Path("."), "--repo", help="Repository path."),
    config: Path | None = typer.Option(None, "--config", help="Config file."),
    exclude: list[str] = typer.Option([], "--exclude", help="Glob of files to skip; repeatable."),
) -> None:
    """List the Swift files a check would run on."""
    repo_root, settings = _load(repo, config)
    settings = settings.with_overrides(exclude=exclude)
    host = ConsoleHost(repo_root=repo_root, base=base, head=head, console=console)
    try:
        candidates = resolve_candidate_files(host.changes(), settings.checker.exclude)
    except RuntimeError as exc:
        raise _abort(exc) from exc
    for path in candidates:
        typer.echo(path)


@cli.command("version")
def version() -> None:
    """Print version."""
    typer.echo(__version__)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
