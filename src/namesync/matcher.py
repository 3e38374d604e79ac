"""Per-directory matching of source files against target files."""

from __future__ import annotations

from collections.abc import Callable

from ._types import ConflictPolicy, SyncResult
from .fsops import LocalFileSystem, free_destination
from .predicates import SyncPredicate, prefix_predicate

ProgressCallback = Callable[[str], None]


def sync_dir(
    source_dir: str,
    target_dir: str,
    predicate: SyncPredicate = prefix_predicate,
    result: SyncResult | None = None,
    progress: ProgressCallback | None = None,
    *,
    ops: LocalFileSystem | None = None,
    on_conflict: ConflictPolicy = ConflictPolicy.FAIL,
) -> SyncResult:
    """Match every file in *source_dir* against the files in *target_dir*.

    For each source file (in listing order) the unclaimed target files
    accepted by *predicate* are collected:

    * exactly one candidate is renamed to the source stem and claimed;
    * no candidate means the source file is copied into *target_dir*; a
      file of the same name already there (one claimed by an earlier
      source file) is handled per *on_conflict*;
    * several candidates are recorded in ``collisions`` for
      :func:`~namesync.resolve_collisions`.

    *target_dir* is created when missing.  *result* is not modified; the
    returned :class:`SyncResult` extends a copy of it.  *progress* is
    called with each source file's full path once it has been handled.
    """
    ops = ops if ops is not None else LocalFileSystem()
    on_conflict = ConflictPolicy(on_conflict)
    result = result.copy() if result is not None else SyncResult()
    claimed = set(result.resolved)

    source_files = ops.list_files(source_dir)
    if not ops.directory_exists(target_dir):
        ops.create_directory(target_dir)
    target_files = ops.list_files(target_dir)

    for source_file in source_files:
        candidates = [
            t.with_parent_directory(target_dir)
            for t in target_files
            if predicate(source_file, t)
        ]
        candidates = [c for c in candidates if c not in claimed]
        source_path = source_file.with_parent_directory(source_dir)

        if len(candidates) == 1:
            target = candidates[0]
            result.resolved.append(target)
            claimed.add(target)
            ops.rename(target, source_file.name)
        elif len(candidates) > 1:
            result.collisions[source_path] = candidates
        else:
            dest = free_destination(ops, source_file.with_parent_directory(target_dir), on_conflict)
            ops.copy(source_path, dest)

        if progress is not None:
            progress(source_path.full_path)

    return result
