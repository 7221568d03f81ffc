import time
from datetime import timedelta

from jose import jwt

from models.log import Log
from models.users import User
from utils.tokenJWT import create_access_token, verify_token


def test_login_returns_token_and_user(client):
    resp = client.post("/login", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "admin"
    assert body["user"]["role"] == "admin"
    assert "password_hash" not in body["user"]

    payload = verify_token(body["access_token"])
    assert payload == {"userId": body["user"]["id"], "username": "admin", "role": "admin"}


def test_token_expires_after_a_day(client):
    resp = client.post("/login", json={"username": "usuario", "password": "user123"})
    claims = jwt.get_unverified_claims(resp.json()["access_token"])
    assert set(claims) == {"userId", "username", "role", "exp"}
    assert 24 * 3600 - 60 <= claims["exp"] - time.time() <= 24 * 3600 + 5


def test_wrong_password_and_unknown_user_look_the_same(client):
    wrong = client.post("/login", json={"username": "admin", "password": "nope"})
    unknown = client.post("/login", json={"username": "ghost", "password": "admin123"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json()["detail"] == unknown.json()["detail"] == "Credenciales inválidas"


def test_login_attempts_are_audited(client, db):
    client.post("/login", json={"username": "admin", "password": "bad"})
    client.post("/login", json={"username": "admin", "password": "admin123"})
    statuses = [row.status for row in db.query(Log).filter(Log.action == "LOGIN").order_by(Log.id).all()]
    assert statuses == ["FAIL", "SUCCESS"]


def test_me_lists_permissions(client, bodeguero_headers):
    resp = client.get("/me", headers=bodeguero_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["role_label"] == "Bodeguero"
    assert "movements:write" in body["permissions"]
    assert "users:manage" not in body["permissions"]


def test_me_requires_token(client):
    assert client.get("/me").status_code == 401
    assert client.get("/me", headers={"Authorization": "Bearer not-a-token"}).status_code == 401


def test_expired_token_is_rejected(client, db):
    user = db.query(User).filter(User.username == "admin").one()
    token = create_access_token(user, expires_delta=timedelta(seconds=-1))
    assert verify_token(token) is None
    assert client.get("/me", headers={"Authorization": f"Bearer {token}"}).status_code == 401


def test_token_signed_with_other_key_is_rejected(client, db):
    user = db.query(User).filter(User.username == "admin").one()
    forged = jwt.encode({"userId": user.id, "username": "admin", "role": "admin", "exp": 4102444800},
                        "someone-elses-key", algorithm="HS256")
    assert verify_token(forged) is None
    assert client.get("/me", headers={"Authorization": f"Bearer {forged}"}).status_code == 401


def test_token_of_deleted_user_is_rejected(client, admin_headers, usuario_headers, db):
    user_id = db.query(User).filter(User.username == "usuario").one().id
    assert client.delete(f"/users/{user_id}", headers=admin_headers).status_code == 200
    assert client.get("/me", headers=usuario_headers).status_code == 401


def test_audit_log_is_admin_only(client, admin_headers, bodeguero_headers):
    assert client.get("/logs", headers=bodeguero_headers).status_code == 403

    resp = client.get("/logs", headers=admin_headers, params={"action": "LOGIN", "status": "SUCCESS"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] >= 2
    assert all(row["action"] == "LOGIN" for row in body["items"])


def test_audit_log_rejects_bad_dates(client, admin_headers):
    resp = client.get("/logs", headers=admin_headers, params={"date_from": "yesterday"})
    assert resp.status_code == 422
