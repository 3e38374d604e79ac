"""Data structures for sync and collision-resolution runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .paths import PathDescriptor


@dataclass
class SyncResult:
    """Accumulated outcome of a directory walk.

    Attributes:
        resolved: Target files already claimed (renamed or matched), in
            claim order.  A claimed target is never matched again.
        collisions: Source file -> target candidates, for source files
            that matched more than one unclaimed target in their directory.
    """
    resolved: list[PathDescriptor] = field(default_factory=list)
    collisions: dict[PathDescriptor, list[PathDescriptor]] = field(default_factory=dict)

    def copy(self) -> SyncResult:
        """Return a copy whose containers can be extended independently."""
        return SyncResult(
            resolved=list(self.resolved),
            collisions={k: list(v) for k, v in self.collisions.items()},
        )


class ConflictPolicy(str, Enum):
    """What to do when a postfixed collision name already exists.

    Members: ``FAIL``, ``OVERWRITE``, ``NUMBER``.
    """
    FAIL = "fail"
    OVERWRITE = "overwrite"
    NUMBER = "number"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass
class CollisionPlan:
    """What collision resolution does, in application order.

    Attributes:
        rename: ``(candidate, new_name)`` pairs; *new_name* is a stem.
        copy: ``(source, destination)`` pairs for sources whose candidates
            were all claimed by longer source names.
    """
    rename: list[tuple[PathDescriptor, str]] = field(default_factory=list)
    copy: list[tuple[PathDescriptor, PathDescriptor]] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.rename) + len(self.copy)


class ChangeActionKind(str, Enum):
    """Kind of filesystem change: ``RENAME``, ``COPY``, or ``MKDIR``."""
    RENAME = "rename"
    COPY = "copy"
    MKDIR = "mkdir"

    def __str__(self) -> str:          # noqa: D105
        return self.value


@dataclass
class ChangeAction:
    """A single change recorded in a :class:`ChangeReport`.

    Attributes:
        src: Path before the change (the new directory for ``MKDIR``).
        dest: Path after the change (``None`` for ``MKDIR``).
        action: :class:`ChangeActionKind` value.
    """
    src: str
    dest: str | None
    action: ChangeActionKind


@dataclass
class ChangeReport:
    """Filesystem changes made (or, for a dry run, planned) by a run.

    Available as the ``changes`` attribute of the filesystem layer.

    Attributes:
        rename: ``(old_path, new_path)`` pairs.
        copy: ``(source_path, destination_path)`` pairs.
        mkdir: Directories created in the target tree.
    """
    rename: list[tuple[str, str]] = field(default_factory=list)
    copy: list[tuple[str, str]] = field(default_factory=list)
    mkdir: list[str] = field(default_factory=list)

    @property
    def in_sync(self) -> bool:
        """``True`` if nothing was renamed, copied or created."""
        return not self.rename and not self.copy and not self.mkdir

    @property
    def total(self) -> int:
        return len(self.rename) + len(self.copy) + len(self.mkdir)

    def actions(self) -> list[ChangeAction]:
        """Return all changes as a flat list sorted by target-side path."""
        result: list[ChangeAction] = []
        for d in self.mkdir:
            result.append(ChangeAction(src=d, dest=None, action=ChangeActionKind.MKDIR))
        for src, dest in self.rename:
            result.append(ChangeAction(src=src, dest=dest, action=ChangeActionKind.RENAME))
        for src, dest in self.copy:
            result.append(ChangeAction(src=src, dest=dest, action=ChangeActionKind.COPY))
        result.sort(key=lambda a: a.dest or a.src)
        return result
