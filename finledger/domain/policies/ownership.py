"""Caller identity and ownership rules."""

from finledger.domain.errors import NotFound, Unauthorized


def require_user(user_id: str | None) -> str:
    """Return the caller id or fail when no identity is present.

    Args:
        user_id: Authenticated user id supplied by the session layer.

    Returns:
        str: Stripped user id.

    Raises:
        Unauthorized: If the id is missing or blank.
    """
    if user_id is None or not str(user_id).strip():
        raise Unauthorized("A valid session is required")
    return str(user_id).strip()


def ensure_owned(entity, user_id: str, entity_name: str, guid: str):
    """Return entity when it exists and belongs to user_id.

    Raises:
        NotFound: If the entity is missing or owned by someone else.
    """
    if entity is None or entity.user_id != user_id:
        raise NotFound(entity_name, guid)
    return entity


__all__ = ["require_user", "ensure_owned"]
