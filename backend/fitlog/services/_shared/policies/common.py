def is_owner(*, actor_id, owner_id) -> bool:
    """Return True if the actor owns the resource."""
    return actor_id is not None and str(actor_id) == str(owner_id)


def can_manage(*, actor_id, owner_id, is_admin: bool) -> bool:
    """Owners manage their own resources; admins manage everyone's."""
    return is_admin or is_owner(actor_id=actor_id, owner_id=owner_id)
