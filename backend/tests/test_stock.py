from models.log import Log
from models.movement import MovementLog


def _move(client, headers, movement_type, item_id, quantity):
    return client.post("/stock/movements", headers=headers,
                       json={"type": movement_type, "item_id": item_id, "quantity": quantity})


def test_movement_sequence_over_api(client, bodeguero_headers, make_item):
    item = make_item(quantity=5)

    resp = _move(client, bodeguero_headers, "entrada", item.id, 3)
    assert resp.status_code == 201
    body = resp.json()
    assert body["item"]["quantity"] == 8
    assert body["log"]["type"] == "entrada"
    assert body["log"]["quantity_change"] == 3
    assert body["log"]["username"] == "bodeguero"
    assert body["log"]["item_name"] == "Tornillo 3/8"

    resp = _move(client, bodeguero_headers, "salida", item.id, 10)
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Stock insuficiente"

    resp = _move(client, bodeguero_headers, "ajuste", item.id, 2)
    assert resp.status_code == 201
    assert resp.json()["item"]["quantity"] == 2
    assert resp.json()["item"]["stock_status"] == "bajo"
    assert resp.json()["log"]["quantity_change"] == -6

    history = client.get("/stock/movements", headers=bodeguero_headers, params={"item_id": item.id}).json()
    assert history["total"] == 2
    assert [row["type"] for row in history["items"]] == ["ajuste", "entrada"]


def test_zero_entrada_is_invalid(client, bodeguero_headers, make_item):
    item = make_item()
    resp = _move(client, bodeguero_headers, "entrada", item.id, 0)
    assert resp.status_code == 422


def test_negative_and_unknown_type_fail_validation(client, bodeguero_headers, make_item):
    item = make_item()
    assert _move(client, bodeguero_headers, "salida", item.id, -1).status_code == 422
    assert _move(client, bodeguero_headers, "transferencia", item.id, 1).status_code == 422


def test_unknown_item(client, bodeguero_headers):
    resp = _move(client, bodeguero_headers, "entrada", "nope", 1)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Item no encontrado"


def test_failed_movement_leaves_no_trace(client, bodeguero_headers, make_item, db):
    item = make_item(quantity=1)
    _move(client, bodeguero_headers, "salida", item.id, 2)
    assert db.query(MovementLog).count() == 0
    assert db.query(Log).filter(Log.action == "STOCK_MOVEMENT").count() == 0


def test_accepted_movement_is_audited(client, bodeguero_headers, make_item, db):
    item = make_item()
    log_id = _move(client, bodeguero_headers, "salida", item.id, 1).json()["log"]["id"]
    audit = db.query(Log).filter(Log.action == "STOCK_MOVEMENT").one()
    assert audit.meta["log_id"] == log_id
    assert audit.meta["change"] == -1


def test_list_filters_by_type(client, bodeguero_headers, make_item):
    item = make_item(quantity=20)
    _move(client, bodeguero_headers, "entrada", item.id, 1)
    _move(client, bodeguero_headers, "salida", item.id, 2)
    _move(client, bodeguero_headers, "salida", item.id, 3)

    resp = client.get("/stock/movements", headers=bodeguero_headers, params={"type": "salida"})
    assert resp.json()["total"] == 2
    assert {row["quantity_change"] for row in resp.json()["items"]} == {-2, -3}


def test_movements_require_login(client, make_item):
    item = make_item()
    assert _move(client, {}, "entrada", item.id, 1).status_code == 401
