from .paths import PathDescriptor
from .predicates import SyncPredicate, normalize_name, prefix_predicate
from .exceptions import CollisionTargetExistsError
from ._exclude import ExcludeFilter, DEFAULT_IGNORED
from ._types import (
    SyncResult, CollisionPlan, ConflictPolicy,
    ChangeReport, ChangeAction, ChangeActionKind,
)
from .fsops import LocalFileSystem, DryRunFileSystem
from .matcher import sync_dir
from .walker import sync_names, source_directories, count_source_files
from .resolver import plan_collisions, resolve_collisions, validate_postfix, DEFAULT_POSTFIX

__all__ = [
    "PathDescriptor", "SyncPredicate", "normalize_name", "prefix_predicate",
    "CollisionTargetExistsError", "ExcludeFilter", "DEFAULT_IGNORED",
    "SyncResult", "CollisionPlan", "ConflictPolicy",
    "ChangeReport", "ChangeAction", "ChangeActionKind",
    "LocalFileSystem", "DryRunFileSystem",
    "sync_dir", "sync_names", "source_directories", "count_source_files",
    "plan_collisions", "resolve_collisions", "validate_postfix", "DEFAULT_POSTFIX",
]
