import pytest

import populate_db
from models.location import Location
from models.users import User
from utils.hashing import verify_password


def test_seed_fills_empty_tables(db):
    assert populate_db.seed_default_data(db) == {"users": 3, "locations": 3}
    assert {u.username for u in db.query(User).all()} == {"admin", "bodeguero", "usuario"}
    assert db.query(Location).count() == 3


def test_second_seed_is_a_no_op(db):
    populate_db.seed_default_data(db)
    assert populate_db.seed_default_data(db) == {"users": 0, "locations": 0}
    assert db.query(User).count() == 3
    assert db.query(Location).count() == 3


def test_reset_restores_default_passwords(seeded):
    admin = seeded.query(User).filter(User.username == "admin").one()
    admin.password_hash = populate_db.get_password_hash("cambiada")
    seeded.add(User(username="extra", password_hash="x"))
    seeded.commit()

    populate_db.reset_default_users(seeded)

    users = {u.username: u for u in seeded.query(User).all()}
    assert set(users) == {"admin", "bodeguero", "usuario"}
    assert verify_password("admin123", users["admin"].password_hash)


def test_failed_reset_keeps_existing_accounts(seeded, monkeypatch):
    def broken_hash(password):
        raise RuntimeError("hashing unavailable")

    monkeypatch.setattr(populate_db, "get_password_hash", broken_hash)
    with pytest.raises(RuntimeError):
        populate_db.reset_default_users(seeded)

    assert seeded.query(User).count() == 3
