"""Ignorable-file filter for directory listings.

Combines the built-in list of filesystem metadata artifacts with
``--exclude`` patterns and ``--exclude-from`` files into a single
predicate consulted by :class:`~namesync.fsops.LocalFileSystem`.

Pattern syntax follows gitignore rules (implemented by
``dulwich.ignore.IgnoreFilter``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from dulwich.ignore import IgnoreFilter

# Metadata files dropped by Finder, Explorer and friends.
DEFAULT_IGNORED = (".DS_Store", "Thumbs.db", "desktop.ini")


class ExcludeFilter:
    """Combines built-in ignores, --exclude patterns and --exclude-from."""

    def __init__(
        self,
        *,
        patterns: Sequence[str] | None = None,
        exclude_from: str | None = None,
        defaults: bool = True,
    ) -> None:
        lines: list[bytes] = []
        if defaults:
            lines.extend(p.encode("utf-8") for p in DEFAULT_IGNORED)
        for p in patterns or ():
            lines.append(p.encode("utf-8"))
        if exclude_from is not None:
            for raw in Path(exclude_from).read_bytes().splitlines():
                line = raw.strip()
                if line and not line.startswith(b"#"):
                    lines.append(line)
        self._filter: IgnoreFilter | None = IgnoreFilter(lines) if lines else None

    # ------------------------------------------------------------------
    @property
    def active(self) -> bool:
        """True if any pattern is configured."""
        return self._filter is not None

    # ------------------------------------------------------------------
    def is_excluded(self, rel_path: str, *, is_dir: bool = False) -> bool:
        """Check *rel_path* (forward slashes) against all patterns."""
        if self._filter is None:
            return False
        check = rel_path + "/" if is_dir else rel_path
        return self._filter.is_ignored(check) is True
