import pytest

from potluck import create_app
from potluck.extensions import db

HOST_PIN = "4321"


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "HOST_PIN": HOST_PIN,
    })
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def enable_secret_santa(client):
    resp = client.patch("/api/config", json={"secretSantaEnabled": True})
    assert resp.status_code == 200
    return client


@pytest.fixture
def join(client):
    def _join(name, preferences="Books and socks"):
        return client.post("/api/secret-santa/join", json={"name": name, "preferences": preferences})
    return _join
