"""The sync and collisions commands."""

from __future__ import annotations

import shutil
import sys

import click

from .._types import ConflictPolicy
from ..exceptions import CollisionTargetExistsError
from ..resolver import resolve_collisions, validate_postfix
from ..walker import count_source_files, sync_names
from ._helpers import (
    main,
    _check_access,
    _conflict_option,
    _exclude_options,
    _make_ops,
    _postfix_option,
    _progress_tick,
    _show_path,
    _status,
    _tree_arguments,
)


def _print_changes(changes) -> None:
    """Print a ChangeReport one action per line."""
    for action in changes.actions():
        if action.action == "mkdir":
            click.echo(f"d {action.src}")
        elif action.action == "rename":
            click.echo(f"~ {action.src} -> {action.dest}")
        else:
            click.echo(f"+ {action.src} -> {action.dest}")


def _summary(changes, n_collisions: int, dry_run: bool) -> str:
    """One-line count of renames, copies, new directories and collisions."""
    n_dirs = len(changes.mkdir)
    dirs = f"{n_dirs} director{'y' if n_dirs == 1 else 'ies'}"
    if dry_run:
        counts = f"Would rename {len(changes.rename)}, copy {len(changes.copy)}, create {dirs}"
    else:
        counts = f"Renamed {len(changes.rename)}, copied {len(changes.copy)}, created {dirs}"
    return f"{counts}; {n_collisions} collision(s)."


def _run_with_bar(enabled, length, label, delay, fn):
    """Call fn(progress) under a click progress bar when *enabled*."""
    if not enabled:
        return fn(None)
    with click.progressbar(length=length, label=label, width=40,
                           item_show_func=_show_path, file=sys.stderr) as bar:
        return fn(_progress_tick(bar, delay))


@main.command()
@_tree_arguments
@_postfix_option
@click.option("--backup", "-b", "backup_dir", type=click.Path(file_okay=False),
              envvar="NAMESYNC_BACKUP",
              help="Copy TARGET here (overwriting) before changing anything.")
@click.option("--dry-run", "-n", "dry_run", is_flag=True, default=False,
              help="Show what would change without touching disk.")
@click.option("--progress/--no-progress", "show_progress", default=None,
              help="Show progress bars (default: on, off with --dry-run).")
@click.option("--delay", type=click.IntRange(min=0), default=0,
              help="Pause in ms after each processed file.")
@_exclude_options
@_conflict_option
@click.pass_context
def sync(ctx, source, target, postfix, backup_dir, dry_run, show_progress, delay,
         exclude, exclude_from, on_conflict):
    """Rename files under TARGET to match their counterparts under SOURCE.

    Source files with no match are copied into TARGET.  Source files that
    match several target files are resolved afterwards: the longest
    candidate is renamed to "<name> <postfix>", or the source file is
    copied in under that name when every candidate is already taken.
    """
    try:
        validate_postfix(postfix)
    except ValueError as exc:
        raise click.ClickException(str(exc))
    _check_access(source, target)
    if show_progress is None:
        show_progress = not dry_run

    if backup_dir:
        if dry_run:
            _status(ctx, "Dry run: skipping backup")
        else:
            try:
                shutil.copytree(target, backup_dir, dirs_exist_ok=True)
            except (OSError, shutil.Error) as exc:
                raise click.ClickException(f"Backup failed: {exc}")
            _status(ctx, f"Backup created: {backup_dir}")

    ops = _make_ops(dry_run, exclude, exclude_from)
    try:
        total = count_source_files(source, ops)
        _status(ctx, f"Files detected (source): {total}")

        result = _run_with_bar(
            show_progress, total, "Processed", delay,
            lambda progress: sync_names(source, target, progress=progress, ops=ops,
                                        on_conflict=ConflictPolicy(on_conflict)),
        )
        _status(ctx, f"Collisions found: {len(result.collisions)}")

        if result.collisions:
            _status(ctx, f"Resolving with postfix {postfix!r}")
            _run_with_bar(
                show_progress, len(result.collisions), "Collisions", delay,
                lambda progress: resolve_collisions(
                    source, target, result.collisions, postfix, progress,
                    ops=ops, claimed=result.resolved,
                    on_conflict=ConflictPolicy(on_conflict),
                ),
            )
    except CollisionTargetExistsError as exc:
        raise click.ClickException(f"{exc} (use --on-conflict to choose a policy)")
    except OSError as exc:
        raise click.ClickException(str(exc))

    changes = ops.changes
    if dry_run:
        _print_changes(changes)
    click.echo(_summary(changes, len(result.collisions), dry_run))
    _status(ctx, "Synchronization completed")


@main.command()
@_tree_arguments
@_exclude_options
@click.pass_context
def collisions(ctx, source, target, exclude, exclude_from):
    """List source files that match more than one file under TARGET.

    Nothing is written.  Each ambiguous source file is printed followed
    by its candidates, longest name first.
    """
    _check_access(source, target)
    ops = _make_ops(True, exclude, exclude_from)
    try:
        # Report only: a dry-run copy onto an existing name changes nothing
        result = sync_names(source, target, ops=ops,
                            on_conflict=ConflictPolicy.OVERWRITE)
    except OSError as exc:
        raise click.ClickException(str(exc))

    if not result.collisions:
        click.echo("No collisions.")
        return
    for src, candidates in result.collisions.items():
        click.echo(src.full_path)
        for c in sorted(candidates, key=lambda f: len(f.name), reverse=True):
            click.echo(f"  {c.full_path}")
    _status(ctx, f"{len(result.collisions)} collision(s)")
