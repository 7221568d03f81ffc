import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEFAULT_DATA"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base, get_db
from main import app
from models.item import Item
from models.users import User
from populate_db import seed_default_data


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    seed_default_data(db)
    return db


@pytest.fixture
def client(session_factory, seeded):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    # Not used as a context manager: the startup seed stays off
    yield TestClient(app)
    app.dependency_overrides.clear()


def login(client, username, password):
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
def admin_headers(client):
    return login(client, "admin", "admin123")


@pytest.fixture
def bodeguero_headers(client):
    return login(client, "bodeguero", "bodega123")


@pytest.fixture
def usuario_headers(client):
    return login(client, "usuario", "user123")


@pytest.fixture
def actor(seeded):
    return seeded.query(User).filter(User.username == "bodeguero").one()


@pytest.fixture
def make_item(db):
    def _make(sku="TOR-001", name="Tornillo 3/8", quantity=5, **kwargs):
        item = Item(sku=sku, name=name, quantity=quantity, **kwargs)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item
    return _make
