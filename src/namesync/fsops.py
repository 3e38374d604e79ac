"""Filesystem access layer used by the matcher, walker and resolver.

The core never touches disk directly; it calls an *ops* object with
``list_files``, ``list_directories``, ``directory_exists``,
``file_exists``, ``create_directory``, ``rename`` and ``copy``.
:class:`LocalFileSystem` performs real changes; :class:`DryRunFileSystem`
only records them.  Both keep a :class:`~namesync.ChangeReport` in
``changes``.
"""

from __future__ import annotations

import os
import shutil

from ._exclude import ExcludeFilter
from ._types import ChangeReport, ConflictPolicy
from .exceptions import CollisionTargetExistsError
from .paths import PathDescriptor


def _to_posix(rel: str) -> str:
    return rel.replace(os.sep, "/")


class LocalFileSystem:
    """Real filesystem operations.

    Args:
        exclude: Filter for ignorable files and directories.  Defaults to
            an :class:`ExcludeFilter` with only the built-in metadata
            artifacts.
    """

    def __init__(self, exclude: ExcludeFilter | None = None) -> None:
        self.exclude = exclude if exclude is not None else ExcludeFilter()
        self.changes = ChangeReport()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_files(self, directory: str) -> list[PathDescriptor]:
        """Regular files directly inside *directory*, sorted by name.

        Symlinks and excluded names are skipped.  Returned descriptors
        carry the bare file name (no directory).
        """
        with os.scandir(directory) as it:
            names = [
                entry.name for entry in it
                if entry.is_file(follow_symlinks=False)
                and not self.exclude.is_excluded(entry.name)
            ]
        return [PathDescriptor.parse(n) for n in sorted(names)]

    def list_directories(self, root: str) -> list[str]:
        """Every directory below *root* as a relative path, in sorted pre-order.

        Symlinked directories are not descended into; excluded directories
        are pruned with their contents.
        """
        result: list[str] = []
        for dirpath, dirnames, _filenames in os.walk(root):
            kept = []
            for dname in sorted(dirnames):
                full = os.path.join(dirpath, dname)
                rel = os.path.relpath(full, root)
                if os.path.islink(full):
                    continue
                if self.exclude.is_excluded(_to_posix(rel), is_dir=True):
                    continue
                kept.append(dname)
            dirnames[:] = kept
            for dname in kept:
                result.append(os.path.relpath(os.path.join(dirpath, dname), root))
        return _preorder(result)

    def directory_exists(self, directory: str) -> bool:
        return os.path.isdir(directory)

    def file_exists(self, path: str) -> bool:
        return os.path.lexists(path)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_directory(self, directory: str) -> None:
        os.makedirs(directory, exist_ok=True)
        self.changes.mkdir.append(directory)

    def rename(self, file: PathDescriptor, new_name: str) -> None:
        """Rename *file* in place to stem *new_name*, keeping its extension.

        Does nothing when the stem is already *new_name*.
        """
        if file.name == new_name:
            return
        dest = file.with_name(new_name)
        os.replace(file.full_path, dest.full_path)
        self.changes.rename.append((file.full_path, dest.full_path))

    def copy(self, source: PathDescriptor, target: PathDescriptor) -> None:
        """Copy *source* to *target* (content and metadata)."""
        shutil.copy2(source.full_path, target.full_path)
        self.changes.copy.append((source.full_path, target.full_path))


class DryRunFileSystem(LocalFileSystem):
    """Read-only stand-in for :class:`LocalFileSystem`.

    Mutations are recorded in ``changes`` and in a virtual overlay so
    later queries see created directories and renamed or copied files,
    but nothing on disk is modified.
    """

    def __init__(self, exclude: ExcludeFilter | None = None) -> None:
        super().__init__(exclude)
        self._dirs: set[str] = set()
        self._added: set[str] = set()
        self._removed: set[str] = set()

    def list_files(self, directory: str) -> list[PathDescriptor]:
        key = os.path.normpath(directory)
        if key in self._dirs and not os.path.isdir(directory):
            return []
        return super().list_files(directory)

    def directory_exists(self, directory: str) -> bool:
        return os.path.normpath(directory) in self._dirs or super().directory_exists(directory)

    def file_exists(self, path: str) -> bool:
        key = os.path.normpath(path)
        if key in self._added:
            return True
        if key in self._removed:
            return False
        return super().file_exists(path)

    def create_directory(self, directory: str) -> None:
        self._dirs.add(os.path.normpath(directory))
        self.changes.mkdir.append(directory)

    def rename(self, file: PathDescriptor, new_name: str) -> None:
        if file.name == new_name:
            return
        dest = file.with_name(new_name)
        self._removed.add(os.path.normpath(file.full_path))
        self._added.discard(os.path.normpath(file.full_path))
        self._added.add(os.path.normpath(dest.full_path))
        self.changes.rename.append((file.full_path, dest.full_path))

    def copy(self, source: PathDescriptor, target: PathDescriptor) -> None:
        self._added.add(os.path.normpath(target.full_path))
        self.changes.copy.append((source.full_path, target.full_path))


def _preorder(rel_dirs: list[str]) -> list[str]:
    """Order relative directory paths parent-first, siblings sorted."""
    return sorted(rel_dirs, key=lambda d: d.split(os.sep))


def free_destination(
    ops: LocalFileSystem, dest: PathDescriptor, policy: ConflictPolicy,
) -> PathDescriptor:
    """Apply *policy* when *dest* already exists; return where to write.

    ``FAIL`` raises :class:`~namesync.CollisionTargetExistsError`,
    ``OVERWRITE`` returns *dest* unchanged, and ``NUMBER`` appends
    ``" 2"``, ``" 3"``, ... to the stem until the name is free.
    """
    if not ops.file_exists(dest.full_path) or policy is ConflictPolicy.OVERWRITE:
        return dest
    if policy is ConflictPolicy.FAIL:
        raise CollisionTargetExistsError(f"Target already exists: {dest.full_path}")
    n = 2
    while True:
        candidate = dest.with_name(f"{dest.name} {n}")
        if not ops.file_exists(candidate.full_path):
            return candidate
        n += 1
