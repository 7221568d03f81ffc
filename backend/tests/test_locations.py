def test_default_locations_are_listed(client, usuario_headers):
    resp = client.get("/locations", headers=usuario_headers)
    assert resp.status_code == 200
    names = [row["name"] for row in resp.json()]
    assert names == ["Almacén Principal", "Estante A1", "Zona de Recepción"]
    assert all(row["item_count"] == 0 for row in resp.json())


def test_item_count_follows_assignments(client, bodeguero_headers, make_item):
    loc = client.post("/locations", headers=bodeguero_headers, json={"name": "Estante B2"}).json()
    make_item(sku="A", location_id=loc["id"])
    make_item(sku="B", location_id=loc["id"])

    assert client.get(f"/locations/{loc['id']}", headers=bodeguero_headers).json()["item_count"] == 2
    listed = {row["name"]: row["item_count"] for row in client.get("/locations", headers=bodeguero_headers).json()}
    assert listed["Estante B2"] == 2
    assert listed["Estante A1"] == 0


def test_create_and_update_location(client, bodeguero_headers):
    resp = client.post("/locations", headers=bodeguero_headers,
                       json={"name": "  Patio  ", "description": "Material pesado"})
    assert resp.status_code == 201
    loc = resp.json()
    assert loc["name"] == "Patio"

    resp = client.patch(f"/locations/{loc['id']}", headers=bodeguero_headers, json={"description": "Techado"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Patio"
    assert resp.json()["description"] == "Techado"


def test_usuario_cannot_create_location(client, usuario_headers):
    assert client.post("/locations", headers=usuario_headers, json={"name": "X"}).status_code == 403


def test_location_in_use_cannot_be_deleted(client, bodeguero_headers, make_item):
    loc = client.post("/locations", headers=bodeguero_headers, json={"name": "Estante C3"}).json()
    item = make_item(location_id=loc["id"])

    resp = client.delete(f"/locations/{loc['id']}", headers=bodeguero_headers)
    assert resp.status_code == 409
    assert "1 items" in resp.json()["detail"]

    client.patch(f"/items/{item.id}", headers=bodeguero_headers, json={"location_id": None})
    assert client.delete(f"/locations/{loc['id']}", headers=bodeguero_headers).status_code == 200
    assert client.get(f"/locations/{loc['id']}", headers=bodeguero_headers).status_code == 404


def test_unknown_location(client, usuario_headers):
    resp = client.get("/locations/nope", headers=usuario_headers)
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Ubicación no encontrada"


def test_blank_location_name_is_rejected(client, bodeguero_headers):
    assert client.post("/locations", headers=bodeguero_headers, json={"name": "  "}).status_code == 422

    loc = client.post("/locations", headers=bodeguero_headers, json={"name": "Patio"}).json()
    assert client.patch(f"/locations/{loc['id']}", headers=bodeguero_headers, json={"name": " "}).status_code == 422
