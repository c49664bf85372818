"""Inspection of database driver errors.

SQLAlchemy wraps driver exceptions; the helpers here look through the
wrapper (and the async adapter's own wrapper) for the error code and the
human-readable detail.
"""

from sqlalchemy.exc import IntegrityError

# PostgreSQL unique_violation
UNIQUE_VIOLATION_SQLSTATE = "23505"

SQLITE_UNIQUE_ERRORNAME = "SQLITE_CONSTRAINT_UNIQUE"


def _driver_errors(error: BaseException) -> list[BaseException]:
    orig = getattr(error, "orig", None)
    if orig is None:
        return []
    cause = orig.__cause__
    return [orig, cause] if cause is not None else [orig]


def get_sqlstate(error: BaseException) -> str | None:
    """Return the SQLSTATE code carried by a wrapped driver error.

    Args:
        error: SQLAlchemy exception.

    Returns:
        Five-character SQLSTATE, or None when the driver supplies none.
    """
    for candidate in _driver_errors(error):
        code = getattr(candidate, "sqlstate", None) or getattr(candidate, "pgcode", None)
        if code:
            return str(code)
    return None


def is_unique_violation(error: BaseException) -> bool:
    """Check whether an error is a unique-constraint violation."""
    if not isinstance(error, IntegrityError):
        return False

    if get_sqlstate(error) == UNIQUE_VIOLATION_SQLSTATE:
        return True

    for candidate in _driver_errors(error):
        if getattr(candidate, "sqlite_errorname", None) == SQLITE_UNIQUE_ERRORNAME:
            return True
        if "UNIQUE constraint failed" in str(candidate):
            return True
    return False


def get_error_detail(error: BaseException) -> str:
    """Return the driver's detail message for an error.

    PostgreSQL drivers expose e.g. ``Key (title)=(Chair) already exists.``
    as ``detail``; other drivers only have the message itself.
    """
    candidates = _driver_errors(error)
    for candidate in candidates:
        detail = getattr(candidate, "detail", None)
        if detail:
            return str(detail)
    if candidates:
        return str(candidates[0])
    return str(error)
