"""Name-matching strategies used to pair source files with target files.

A sync predicate takes ``(source, target)`` :class:`~namesync.PathDescriptor`
objects and returns ``True`` when *target* should be renamed after
*source*.  Only names are compared, never file contents.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from .paths import PathDescriptor

SyncPredicate = Callable[[PathDescriptor, PathDescriptor], bool]

_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")


def normalize_name(name: str) -> str:
    """Strip every character that is not an ASCII letter or digit.

    Used for matching only; output names always keep their punctuation.
    """
    return _NON_ALNUM.sub("", name)


def prefix_predicate(source: PathDescriptor, target: PathDescriptor) -> bool:
    """Match when the normalized source stem starts with the normalized target stem.

    The match is directional: ``"Report_2024"`` matches a target named
    ``"Report"``, but ``"Report"`` does not match ``"Report_2024"``.
    """
    return normalize_name(source.name).startswith(normalize_name(target.name))
