"""Error types and store-error classification"""

# PostgreSQL SQLSTATE for "relation does not exist"
RELATION_NOT_FOUND_SQLSTATE = "42P01"


class EmptyPoiDataError(ValueError):
    """Replace was asked to load an empty POI set; the store is left untouched."""


def is_relation_missing(error: BaseException) -> bool:
    """Check whether a store failure means the POI table has not been created yet.

    SQLAlchemy wraps the driver exception in ``orig`` and asyncpg chains its own
    error through ``__cause__``, so the whole chain is searched for the SQLSTATE.
    """
    seen = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        code = getattr(current, "sqlstate", None) or getattr(current, "pgcode", None)
        if code == RELATION_NOT_FOUND_SQLSTATE:
            return True
        current = getattr(current, "orig", None) or current.__cause__
    return False


def error_type_name(error: BaseException) -> str:
    """Short label for metrics"""
    if is_relation_missing(error):
        return "relation_missing"
    return type(error).__name__
