from tokenauth.models.user import Role


def has_role(*, principal, required: Role) -> bool:
    """Return True if the principal is present and holds ``required``."""
    return principal is not None and principal.role == required
