"""Exceptions for namesync."""


class CollisionTargetExistsError(FileExistsError):
    """Raised when a copy or postfixed rename would replace an existing file.

    Only raised under :attr:`~namesync.ConflictPolicy.FAIL`.  Pick
    ``ConflictPolicy.NUMBER`` to disambiguate further, or
    ``ConflictPolicy.OVERWRITE`` to replace the existing file.
    """
