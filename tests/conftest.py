from unittest.mock import MagicMock

import pytest

from config import Config
from presentai import create_app, db
from presentai.models import User

USER_EMAIL = "ada@presentai.io"
USER_PASSWORD = "difference-engine"


class TestConfig(Config):
    __test__ = False

    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    WTF_CSRF_ENABLED = False
    OPENAI_API_KEY = "sk-test"
    OPENAI_TEXT_MODEL = "gpt-4o-mini"
    OPENAI_IMAGE_MODEL = "dall-e-3"
    IMAGE_PROVIDER = "openai"
    IMAGE_API_URL = None
    IMAGE_API_KEY = None
    S3_ENDPOINT = "http://minio:9000"
    S3_ACCESS_KEY = "minio"
    S3_SECRET_KEY = "minio-secret"
    S3_BUCKET = "presentai-test"
    S3_PUBLIC_BASE_URL = None
    PROMPT_LOG_FILE = None


@pytest.fixture
def app():
    app = create_app(TestConfig)
    # in-memory SQLite stays alive across contexts (single shared connection)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def s3_client(app):
    """Stands in for the boto3 client cached on the app."""
    fake = MagicMock()
    app.extensions["s3_client"] = fake
    return fake


def make_user(app, name="Ada Lovelace", email=USER_EMAIL, password=USER_PASSWORD):
    """Creates a user and returns its id."""
    with app.app_context():
        user = User(name=name, email=email)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def user_id(app):
    return make_user(app)


@pytest.fixture
def auth_client(client, user_id):
    response = client.post("/api/auth/login", json={"email": USER_EMAIL, "password": USER_PASSWORD})
    assert response.status_code == 200
    return client
