# backend/utils/permissions.py
import enum
from typing import FrozenSet, Mapping


class Role(str, enum.Enum):
    ADMIN = "admin"
    BODEGUERO = "bodeguero"
    USUARIO = "usuario"


# Capabilities checked by the routers; roles never get compared by name
class Permission(str, enum.Enum):
    ITEMS_READ = "items:read"
    ITEMS_WRITE = "items:write"
    ITEMS_DELETE = "items:delete"
    MOVEMENTS_READ = "movements:read"
    MOVEMENTS_WRITE = "movements:write"
    REPORTS_READ = "reports:read"
    LOCATIONS_READ = "locations:read"
    LOCATIONS_WRITE = "locations:write"
    USERS_MANAGE = "users:manage"
    NOTES_WRITE = "notes:write"
    NOTES_REVIEW = "notes:review"
    NOTES_MODERATE = "notes:moderate"
    AUDIT_READ = "audit:read"


_BASE = frozenset({
    Permission.ITEMS_READ,
    Permission.LOCATIONS_READ,
    Permission.NOTES_WRITE,
})

_WAREHOUSE = _BASE | {
    Permission.ITEMS_WRITE,
    Permission.MOVEMENTS_READ,
    Permission.MOVEMENTS_WRITE,
    Permission.REPORTS_READ,
    Permission.LOCATIONS_WRITE,
    Permission.NOTES_REVIEW,
}

ROLE_PERMISSIONS: Mapping[Role, FrozenSet[Permission]] = {
    Role.USUARIO: _BASE,
    Role.BODEGUERO: frozenset(_WAREHOUSE),
    Role.ADMIN: frozenset(Permission),
}

# Display labels used by the UI
ROLE_LABELS = {
    Role.ADMIN: "Administrador",
    Role.BODEGUERO: "Bodeguero",
    Role.USUARIO: "Usuario",
}


def permissions_for(role) -> FrozenSet[Permission]:
    """Return the permission set of a role; unknown roles get nothing."""
    try:
        return ROLE_PERMISSIONS[Role(role)]
    except ValueError:
        return frozenset()


def has_permission(role, permission: Permission) -> bool:
    return Permission(permission) in permissions_for(role)
