"""Path descriptors: a file path split into root, directory, name and extension."""

from __future__ import annotations

import os


def _relpath(path: str, base: str) -> str:
    rel = os.path.relpath(path or os.curdir, base or os.curdir)
    return "" if rel == os.curdir else rel


class PathDescriptor:
    """A file path decomposed into ``root``, ``directory``, ``name`` and ``extension``.

    Treat instances as immutable: the ``with_*`` and ``relative_to`` helpers
    return new descriptors.  Two descriptors are equal when their
    :attr:`full_path` strings are equal, so they can be used as dict keys.

    Attributes:
        root: ``"/"`` for absolute paths, ``""`` otherwise.
        directory: Parent directory (``""`` for a bare file name).
        name: File name without its extension (the stem).
        extension: Extension including the leading dot, or ``""``.
    """

    __slots__ = ("root", "directory", "name", "extension")

    def __init__(self, root: str, directory: str, name: str, extension: str) -> None:
        self.root = root
        self.directory = directory
        self.name = name
        self.extension = extension

    @classmethod
    def parse(cls, path: str | os.PathLike) -> PathDescriptor:
        """Decompose *path*.  Never fails; a missing extension is ``""``."""
        p = os.fspath(path)
        stripped = p.rstrip(os.sep)
        if not stripped and p:
            # Filesystem root itself
            return cls(os.sep, os.sep, "", "")
        directory, base = os.path.split(stripped)
        if directory and directory != os.sep:
            directory = directory.rstrip(os.sep) or os.sep
        root = os.sep if stripped.startswith(os.sep) else ""
        name, extension = os.path.splitext(base)
        return cls(root, directory, name, extension)

    # ------------------------------------------------------------------
    @property
    def base_name(self) -> str:
        """``name + extension``."""
        return self.name + self.extension

    @property
    def full_path(self) -> str:
        if not self.directory:
            return self.root + self.base_name
        if self.directory == self.root:
            return self.directory + self.base_name
        return os.path.join(self.directory, self.base_name)

    # ------------------------------------------------------------------
    def with_name(self, name: str) -> PathDescriptor:
        """Return a copy with the stem replaced by *name* (extension kept)."""
        return PathDescriptor(self.root, self.directory, name, self.extension)

    def with_parent_directory(self, parent: str | os.PathLike) -> PathDescriptor:
        """Return a copy reparented under *parent*.

        The sub-path already held in :attr:`directory` is preserved, so
        ``"b/c.txt"`` reparented under ``"/t"`` becomes ``"/t/b/c.txt"``.
        """
        parent = os.fspath(parent)
        if self.directory:
            directory = os.path.normpath(os.path.join(parent, self.directory.lstrip(os.sep)))
        else:
            directory = parent
        return PathDescriptor.parse(os.path.join(directory, self.base_name) if directory else self.base_name)

    def relative_to(self, base: str | os.PathLike) -> PathDescriptor:
        """Return a copy whose :attr:`directory` is relative to *base*."""
        directory = _relpath(self.directory, os.fspath(base))
        return PathDescriptor("", directory, self.name, self.extension)

    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathDescriptor):
            return NotImplemented
        return self.full_path == other.full_path

    def __hash__(self) -> int:
        return hash(self.full_path)

    def __fspath__(self) -> str:
        return self.full_path

    def __str__(self) -> str:
        return self.full_path

    def __repr__(self) -> str:
        return f"PathDescriptor({self.full_path!r})"
