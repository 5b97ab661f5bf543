"""CLI command implementations"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from sqlmodel import Session

from revdiff.config import Settings, load_config
from revdiff.core.counter import count_changes
from revdiff.core.export import write_review
from revdiff.core.models import ChangeKind, ContentPair, RawPatch, ReviewRequest
from revdiff.core.normalize import normalize
from revdiff.core.pipeline import run_review
from revdiff.core.providers import LocalTreeFetcher, discover_changes
from revdiff.core.render import format_diff
from revdiff.core.session import ReviewSession
from revdiff.core.views import format_side_by_side, side_by_side
from revdiff.crud.database import init_db, make_engine, reset_db
from revdiff.crud.sql_store import SQLDiffStore


_KIND_LETTER = {ChangeKind.add: "A", ChangeKind.delete: "D", ChangeKind.edit: "M", ChangeKind.rename: "R"}


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling and configure logging."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")
    return settings


def _kind(value: str) -> ChangeKind:
    try:
        return ChangeKind.from_provider(value)
    except ValueError as e:
        _fail(str(e))


def _read(path: Path) -> str:
    if str(path) == "/dev/null":
        return ""
    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def diff_cmd(
    before: Annotated[Path, typer.Argument(help="Old version of the file (or /dev/null)")],
    after: Annotated[Path, typer.Argument(help="New version of the file (or /dev/null)")],
    path: Annotated[Optional[str], typer.Option("--path", help="Path shown in headers (default: AFTER)")] = None,
    kind: Annotated[str, typer.Option("--kind", help="add, delete, edit, or rename")] = "edit",
    renamed_from: Annotated[Optional[str], typer.Option("--renamed-from", help="Old path of a renamed file")] = None,
    context: Annotated[Optional[int], typer.Option("--context-lines", "-U", help="Context lines per hunk")] = None,
    stat: Annotated[bool, typer.Option("--stat", help="Print only the +/- counts")] = False,
    ):
    """Diff two local files and print a unified diff."""
    settings = _settings(overrides={"context_lines": context})
    pair = ContentPair(
        before=_read(before), after=_read(after),
        change_kind=_kind(kind), renamed_from=renamed_from,
    )
    default_path = (before if str(after) == "/dev/null" else after).as_posix()
    diff = normalize(
        pair, path or default_path,
        context_lines=settings.context_lines,
        max_bytes=settings.max_file_bytes,
        max_cells=settings.max_table_cells,
    )
    rendered = format_diff(diff)
    if stat:
        summary = count_changes(rendered)
        typer.echo(f"+{summary.additions} -{summary.deletions}")
    else:
        typer.echo(rendered, nl=False)


def patch_cmd(
    patch_file: Annotated[Path, typer.Argument(help="Provider patch text (hunks, optionally with git headers)")],
    path: Annotated[str, typer.Option("--path", help="Path the patch was declared for")],
    kind: Annotated[str, typer.Option("--kind", help="Provider change type (added, modified, ...)")] = "edit",
    renamed_from: Annotated[Optional[str], typer.Option("--renamed-from", help="Old path of a renamed file")] = None,
    ):
    """Normalize a provider patch and print it as a complete unified diff."""
    settings = _settings()
    raw = RawPatch(text=_read(patch_file), change_kind=_kind(kind), renamed_from=renamed_from)
    diff = normalize(raw, path, max_bytes=settings.max_file_bytes)
    typer.echo(format_diff(diff), nl=False)
    if diff.is_placeholder:
        raise typer.Exit(1)


def count_cmd(
    diff_file: Annotated[Path, typer.Argument(help="Rendered unified diff")],
    ):
    """Print addition/deletion counts (whitespace-only lines are not counted)."""
    _settings()
    summary = count_changes(_read(diff_file))
    typer.echo(f"+{summary.additions} -{summary.deletions}")


def review_cmd(
    base: Annotated[Path, typer.Argument(help="Directory holding the base snapshot")],
    head: Annotated[Path, typer.Argument(help="Directory holding the head snapshot")],
    provider: Annotated[str, typer.Option("--provider", help="Provider name used in store keys")] = "local",
    review_id: Annotated[str, typer.Option("--review-id", help="Review identifier used in store keys")] = "1",
    context: Annotated[Optional[int], typer.Option("--context-lines", "-U", help="Context lines per hunk")] = None,
    concurrency: Annotated[Optional[int], typer.Option("--concurrency", help="Files diffed in parallel")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Export directory")] = None,
    ):
    """Diff two directory snapshots, store the results, and export them."""
    settings = _settings(overrides={"context_lines": context, "concurrency": concurrency, "output_dir": out})
    for d in (base, head):
        if not d.is_dir():
            _fail(f"Not a directory: {d}")

    request = ReviewRequest(
        provider=provider, review_id=review_id,
        base_ref="base", head_ref="head",
        files=discover_changes(base, head),
    )
    if not request.files:
        typer.echo("No changes found.")
        raise typer.Exit(0)

    engine = make_engine(settings.db_url)
    init_db(engine)
    fetcher = LocalTreeFetcher({"base": base, "head": head})
    try:
        with Session(engine) as db:
            session = ReviewSession(provider, review_id, SQLDiffStore(db), keep=True)
            session.clear()
            entries = asyncio.run(run_review(request, session, contents=fetcher, settings=settings))
            totals = session.totals()
    except Exception as e:
        _fail("Review failed", e)

    for e in entries:
        stats = e.diff.notice if e.diff.is_placeholder else f"+{e.summary.additions} -{e.summary.deletions}"
        typer.echo(f"  {_KIND_LETTER[e.diff.change_kind]} {e.diff.path}  {stats}")
    combined, sidecar = write_review(provider, review_id, entries, Path(settings.output_dir))
    typer.echo(f"{len(entries)} file(s) changed, +{totals.additions} -{totals.deletions}")
    typer.echo(f"Exported {combined} and {sidecar}")


def show_cmd(
    key: Annotated[str, typer.Argument(help="Store key ({provider}_{review_id}_{path})")],
    sbs: Annotated[bool, typer.Option("--side-by-side", help="Two-column view")] = False,
    ):
    """Print a stored diff."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as db:
        entry = SQLDiffStore(db).get(key)
    if entry is None:
        _fail(f"No stored diff with key {key!r}")
    if sbs and not entry.diff.is_placeholder:
        typer.echo(format_side_by_side(side_by_side(entry.diff)))
    else:
        typer.echo(entry.rendered, nl=False)


def list_cmd():
    """List stored reviews and their totals."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as db:
        store = SQLDiffStore(db)
        reviews = store.list_reviews()
        if not reviews:
            typer.echo("No reviews stored.")
            raise typer.Exit(1)
        for provider, review_id in reviews:
            totals = ReviewSession(provider, review_id, store, keep=True).totals()
            typer.echo(f"{provider} {review_id}  +{totals.additions} -{totals.deletions}")


def clear_cmd(
    provider: Annotated[str, typer.Option("--provider", help="Provider name")],
    review_id: Annotated[str, typer.Option("--review-id", help="Review identifier")],
    ):
    """End a review session: delete its stored diffs."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    init_db(engine)
    with Session(engine) as db:
        removed = ReviewSession(provider, review_id, SQLDiffStore(db)).clear()
    typer.echo(f"Removed {removed} stored diff(s).")


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Drop and recreate all tables")] = False,
    ):
    """Initialize database schema. Use --reset to clear existing data."""
    settings = _settings()
    engine = make_engine(settings.db_url)
    if reset:
        reset_db(engine)
        typer.echo("Existing data cleared.")
    else:
        init_db(engine)
    typer.echo(f"Database initialized at: {settings.db_url}")
