def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return str(actor_id) == str(owner_id)


def is_self_target(*, actor_id, target_id) -> bool:
    """Return True when an operation targets the acting identity (or nobody else)."""
    return target_id is None or is_owner(actor_id=actor_id, owner_id=target_id)
