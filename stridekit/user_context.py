"""Owner identity context for scoped database access.

Every stored activity and config row belongs to an owner. The CLI never
calls ``set_user_id()`` so it always operates on ``user_id=0``; an embedding
service calls ``set_user_id()`` once per request so every downstream read and
write targets that owner's rows without changing function signatures.
"""

from contextvars import ContextVar

_current_user_id: ContextVar[int] = ContextVar("current_user_id", default=0)


def get_user_id() -> int:
    """Return the current user ID (0 = CLI / unscoped)."""
    return _current_user_id.get()


def set_user_id(uid: int) -> None:
    """Set the current user ID for this execution context."""
    _current_user_id.set(uid)
