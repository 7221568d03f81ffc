import pytest

from utils.permissions import Permission, Role, has_permission, permissions_for


def test_admin_has_every_permission():
    assert permissions_for(Role.ADMIN) == frozenset(Permission)


@pytest.mark.parametrize("permission,expected", [
    (Permission.ITEMS_READ, True),
    (Permission.ITEMS_WRITE, True),
    (Permission.ITEMS_DELETE, False),
    (Permission.MOVEMENTS_WRITE, True),
    (Permission.REPORTS_READ, True),
    (Permission.NOTES_REVIEW, True),
    (Permission.NOTES_MODERATE, False),
    (Permission.USERS_MANAGE, False),
    (Permission.AUDIT_READ, False),
])
def test_bodeguero_permissions(permission, expected):
    assert has_permission("bodeguero", permission) is expected


def test_usuario_can_only_read_and_write_notes():
    assert permissions_for("usuario") == {
        Permission.ITEMS_READ,
        Permission.LOCATIONS_READ,
        Permission.NOTES_WRITE,
    }


def test_unknown_role_has_no_permissions():
    assert permissions_for("superuser") == frozenset()
    assert not has_permission("superuser", Permission.ITEMS_READ)


def test_permission_accepts_string_value():
    assert has_permission(Role.ADMIN, "users:manage")


def test_usuario_cannot_move_stock(client, usuario_headers, make_item):
    item = make_item()
    resp = client.post("/stock/movements", headers=usuario_headers,
                       json={"type": "entrada", "item_id": item.id, "quantity": 1})
    assert resp.status_code == 403


def test_usuario_sees_inventory_but_not_movements(client, usuario_headers):
    assert client.get("/items", headers=usuario_headers).status_code == 200
    assert client.get("/locations", headers=usuario_headers).status_code == 200
    assert client.get("/stock/movements", headers=usuario_headers).status_code == 403
    assert client.get("/reports/movements", headers=usuario_headers).status_code == 403


def test_only_admin_manages_users(client, admin_headers, bodeguero_headers):
    assert client.get("/users", headers=bodeguero_headers).status_code == 403
    assert client.get("/users", headers=admin_headers).status_code == 200
