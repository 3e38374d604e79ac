"""Second-pass resolution of ambiguous matches.

Each collision maps one source file to several target candidates.
Sources are handled longest stem first, so a short generic name cannot
take a candidate that a longer, more specific name also matches.  Each
source claims its longest unclaimed candidate and renames it to
``"<source stem> <postfix>"``; when every candidate is already claimed,
the source file itself is copied into the mirrored target directory
under that postfixed name.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping, Sequence

from ._types import CollisionPlan, ConflictPolicy
from .fsops import LocalFileSystem, free_destination
from .matcher import ProgressCallback
from .paths import PathDescriptor

DEFAULT_POSTFIX = "$collision$"


def _by_name_length_desc(files: Iterable[PathDescriptor]) -> list[PathDescriptor]:
    # sorted() is stable: equal lengths keep their original order
    return sorted(files, key=lambda f: len(f.name), reverse=True)


def validate_postfix(postfix: str) -> None:
    """Raise ValueError unless *postfix* has a non-space character."""
    if not postfix or not postfix.strip():
        raise ValueError("Collision postfix must not be empty")


def plan_collisions(
    source_root: str,
    target_root: str,
    collisions: Mapping[PathDescriptor, Sequence[PathDescriptor]],
    postfix: str = DEFAULT_POSTFIX,
    *,
    claimed: Iterable[PathDescriptor] = (),
) -> CollisionPlan:
    """Decide how every collision is resolved, without touching disk.

    Args:
        source_root: Root of the source tree.
        target_root: Root of the target tree.
        collisions: Source file -> candidate target files.
        postfix: Appended to the source stem after a space.
        claimed: Targets that must not be picked (for example
            ``SyncResult.resolved`` from the walk).

    Raises:
        ValueError: If *postfix* is empty or whitespace.
    """
    validate_postfix(postfix)
    taken = set(claimed)
    plan = CollisionPlan()

    for source in _by_name_length_desc(collisions):
        free = [c for c in collisions[source] if c not in taken]
        new_name = f"{source.name} {postfix}"
        if free:
            pick = _by_name_length_desc(free)[0]
            taken.add(pick)
            plan.rename.append((pick, new_name))
        else:
            dest = source.relative_to(source_root).with_parent_directory(target_root)
            plan.copy.append((source, dest.with_name(new_name)))
    return plan


def resolve_collisions(
    source_root: str,
    target_root: str,
    collisions: Mapping[PathDescriptor, Sequence[PathDescriptor]],
    postfix: str = DEFAULT_POSTFIX,
    progress: ProgressCallback | None = None,
    *,
    ops: LocalFileSystem | None = None,
    claimed: Iterable[PathDescriptor] = (),
    on_conflict: ConflictPolicy = ConflictPolicy.FAIL,
) -> CollisionPlan:
    """Resolve every collision by a postfixed rename or a postfixed copy.

    Renames are applied first, then copies.  *progress* is called once
    per collision after its change, with the renamed target's path or
    the copied source's path.  Returns the applied :class:`CollisionPlan`.

    Raises:
        ValueError: If *postfix* is empty or whitespace.
        CollisionTargetExistsError: If a postfixed name is already taken
            and *on_conflict* is ``ConflictPolicy.FAIL``.
    """
    ops = ops if ops is not None else LocalFileSystem()
    on_conflict = ConflictPolicy(on_conflict)
    plan = plan_collisions(
        os.fspath(source_root), os.fspath(target_root), collisions, postfix,
        claimed=claimed,
    )

    applied = CollisionPlan()
    for target, new_name in plan.rename:
        dest = free_destination(ops, target.with_name(new_name), on_conflict)
        ops.rename(target, dest.name)
        applied.rename.append((target, dest.name))
        if progress is not None:
            progress(target.full_path)

    for source, dest in plan.copy:
        parent = dest.directory
        if parent and not ops.directory_exists(parent):
            ops.create_directory(parent)
        dest = free_destination(ops, dest, on_conflict)
        ops.copy(source, dest)
        applied.copy.append((source, dest))
        if progress is not None:
            progress(source.full_path)

    return applied
