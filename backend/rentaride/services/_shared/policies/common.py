from collections.abc import Iterable


def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def authorize(roles: Iterable[str] | None, allowed: Iterable[str]) -> bool:
    """Return True when the caller holds at least one of the ``allowed`` roles."""
    return bool(set(roles or ()) & set(allowed))
