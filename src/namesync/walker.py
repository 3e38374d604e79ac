"""Tree-level sync: run the directory matcher over a mirrored tree."""

from __future__ import annotations

import os

from ._types import ConflictPolicy, SyncResult
from .fsops import LocalFileSystem
from .matcher import ProgressCallback, sync_dir
from .predicates import SyncPredicate, prefix_predicate


def source_directories(source_root: str, ops: LocalFileSystem | None = None) -> list[str]:
    """Relative paths of every directory to visit, root (``""``) first."""
    ops = ops if ops is not None else LocalFileSystem()
    return [""] + ops.list_directories(source_root)


def count_source_files(source_root: str, ops: LocalFileSystem | None = None) -> int:
    """Number of source files :func:`sync_names` will process."""
    ops = ops if ops is not None else LocalFileSystem()
    return sum(
        len(ops.list_files(os.path.join(source_root, d)))
        for d in source_directories(source_root, ops)
    )


def sync_names(
    source_root: str,
    target_root: str,
    predicate: SyncPredicate = prefix_predicate,
    progress: ProgressCallback | None = None,
    *,
    ops: LocalFileSystem | None = None,
    on_conflict: ConflictPolicy = ConflictPolicy.FAIL,
) -> SyncResult:
    """Rename files under *target_root* after their matches under *source_root*.

    The root pair is processed first, then every source subdirectory in
    sorted pre-order against the same relative path under *target_root*
    (created when missing).  Target files and directories without a
    source counterpart are left alone.  A copy that would replace an existing
    target file follows *on_conflict* (see :func:`~namesync.sync_dir`).

    Returns the accumulated :class:`SyncResult`; pass its ``collisions``
    to :func:`~namesync.resolve_collisions`.
    """
    ops = ops if ops is not None else LocalFileSystem()
    source_root = os.fspath(source_root)
    target_root = os.fspath(target_root)

    result = SyncResult()
    for rel in source_directories(source_root, ops):
        result = sync_dir(
            os.path.join(source_root, rel) if rel else source_root,
            os.path.join(target_root, rel) if rel else target_root,
            predicate,
            result,
            progress,
            ops=ops,
            on_conflict=on_conflict,
        )
    return result
