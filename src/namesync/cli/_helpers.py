"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import os
import time

import click

from .._exclude import ExcludeFilter
from .._types import ConflictPolicy
from ..fsops import DryRunFileSystem, LocalFileSystem
from ..resolver import DEFAULT_POSTFIX


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


def _check_access(source_root: str, target_root: str) -> None:
    """Fail early when the trees cannot be read or written."""
    if not os.access(target_root, os.R_OK | os.W_OK):
        raise click.ClickException("No write access to target directory")
    if not os.access(source_root, os.R_OK):
        raise click.ClickException("No read access to source directory")


def _make_ops(dry_run: bool, exclude, exclude_from) -> LocalFileSystem:
    """Build the filesystem layer for a run."""
    excl = ExcludeFilter(patterns=exclude, exclude_from=exclude_from)
    return DryRunFileSystem(excl) if dry_run else LocalFileSystem(excl)


def _progress_tick(bar, delay_ms: int):
    """Return a progress callback that advances *bar* by one item."""
    def _on_progress(path):
        if delay_ms:
            time.sleep(delay_ms / 1000)
        bar.update(1, current_item=path)
    return _on_progress


def _show_path(path):
    return path or ""


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

def _tree_arguments(f):
    """SOURCE and TARGET directory arguments."""
    f = click.argument("target", type=click.Path(exists=True, file_okay=False))(f)
    f = click.argument("source", type=click.Path(exists=True, file_okay=False))(f)
    return f


def _exclude_options(f):
    """Shared --exclude / --exclude-from options."""
    f = click.option("--exclude-from", "exclude_from", type=click.Path(exists=True),
                     help="Read exclude patterns from file.")(f)
    f = click.option("--exclude", multiple=True,
                     help="Ignore files matching pattern (gitignore syntax, repeatable). "
                          "File patterns are matched against the bare file name, "
                          "so patterns with a directory part only exclude directories.")(f)
    return f


def _postfix_option(f):
    return click.option(
        "--postfix", "-p", default=DEFAULT_POSTFIX, show_default=True,
        envvar="NAMESYNC_POSTFIX",
        help="Suffix added (after a space) to names resolved from a collision.",
    )(f)


def _conflict_option(f):
    return click.option(
        "--on-conflict", "on_conflict",
        type=click.Choice([p.value for p in ConflictPolicy]),
        default=ConflictPolicy.FAIL.value, show_default=True,
        help="What to do when a postfixed name already exists.",
    )(f)


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """namesync: rename files in a target tree after a source tree.

    Every file under SOURCE is paired with a file in the same relative
    directory under TARGET whose name it starts with (ignoring anything
    that is not a letter or digit).  The target file is renamed to the
    source name, or the source file is copied in when nothing matches.

    \b
    Quick start:
      namesync sync ./originals ./edited --dry-run
      namesync sync ./originals ./edited -b ./edited.bak
      namesync collisions ./originals ./edited
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
