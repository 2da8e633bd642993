import pytest

from conftest import TestConfig, USER_EMAIL, USER_PASSWORD, make_user
from presentai import create_app, db
from presentai.models import User


def test_register_creates_user_with_hashed_password(app, client):
    response = client.post("/api/auth/register", json={
        "name": "Grace Hopper",
        "email": "grace@presentai.io",
        "password": "cobol-rules",
    })

    assert response.status_code == 201
    body = response.get_json()
    assert body["user"]["email"] == "grace@presentai.io"
    assert "password" not in body["user"]

    with app.app_context():
        user = User.query.filter_by(email="grace@presentai.io").one()
        assert user.password_hash != "cobol-rules"
        assert user.check_password("cobol-rules")


def test_register_rejects_duplicate_email(client, user_id):
    response = client.post("/api/auth/register", json={
        "name": "Another Ada",
        "email": USER_EMAIL,
        "password": "something-long",
    })

    assert response.status_code == 400
    assert "email" in response.get_json()["details"]


@pytest.mark.parametrize("payload, field", [
    ({"name": "G", "email": "g@presentai.io", "password": "longenough"}, "name"),
    ({"name": "Grace", "email": "not-an-email", "password": "longenough"}, "email"),
    ({"name": "Grace", "email": "g@presentai.io", "password": "short"}, "password"),
    ({"name": "Grace", "email": "g@presentai.io", "password": 12345678}, "password"),
])
def test_register_validation_errors(client, payload, field):
    response = client.post("/api/auth/register", json=payload)

    assert response.status_code == 400
    assert field in response.get_json()["details"]


def test_register_requires_json_object(client):
    response = client.post("/api/auth/register", data="name=Grace", content_type="application/x-www-form-urlencoded")

    assert response.status_code == 400
    assert response.get_json()["details"] == {"body": ["Expected a JSON object."]}


def test_login_me_logout_cycle(client, user_id):
    assert client.get("/api/auth/me").status_code == 401

    login = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert login.status_code == 200
    assert login.get_json()["user"]["id"] == user_id

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.get_json()["user"]["name"] == "Ada Lovelace"

    assert client.post("/api/auth/logout").status_code == 200
    assert client.get("/api/auth/me").status_code == 401


def test_login_with_wrong_password(client, user_id):
    response = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": "analytical-engine"})

    assert response.status_code == 401
    assert "error" in response.get_json()


def test_unauthenticated_requests_get_json_401(client):
    response = client.post("/api/auth/logout")

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}


@pytest.fixture
def csrf_app():
    class CSRFConfig(TestConfig):
        WTF_CSRF_ENABLED = True

    app = create_app(CSRFConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.drop_all()


def test_csrf_is_enforced_when_enabled(csrf_app):
    client = csrf_app.test_client()

    rejected = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert rejected.status_code == 400

    token = client.get("/api/auth/csrf-token").get_json()["csrf_token"]
    accepted = client.post("/api/auth/register", json={
        "name": "Grace Hopper", "email": "grace@presentai.io", "password": "cobol-rules",
    }, headers={"X-CSRFToken": token})
    assert accepted.status_code == 201


@pytest.mark.parametrize("path", ["/api/images/generate", "/api/presentation/generate"])
def test_anonymous_post_gets_401_before_csrf_check(csrf_app, path):
    response = csrf_app.test_client().post(path, json={"prompt": "harbor"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}


def test_logged_in_post_still_needs_csrf_token(csrf_app):
    make_user(csrf_app)
    client = csrf_app.test_client()
    token = client.get("/api/auth/csrf-token").get_json()["csrf_token"]
    login = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD},
                        headers={"X-CSRFToken": token})
    assert login.status_code == 200

    response = client.post("/api/images/generate", json={"prompt": "harbor"})

    assert response.status_code == 400
    assert "CSRF" in response.get_json()["error"]
