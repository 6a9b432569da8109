"""
Shared fixtures: every test gets its own data directory and credential file
under ``tmp_path``, seeded with an ``admin`` / ``secret`` account.
"""

import os

os.environ.setdefault("CMS_ENV", "test")

import pytest  # noqa: E402

from cms import create_app, credentials  # noqa: E402
from cms import config  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "secret"


def make_config(tmp_path, **overrides):
    attrs = {
        "SECRET_KEY": "test-secret",
        "DATA_DIR": str(tmp_path / "data"),
        "USERS_FILE": str(tmp_path / "users.yml"),
    }
    attrs.update(overrides)
    return type("LocalTestConfig", (config.TestConfig,), attrs)


@pytest.fixture
def users_file(tmp_path):
    path = tmp_path / "users.yml"
    path.write_text("")
    return path


@pytest.fixture
def app(tmp_path, users_file):
    app = create_app(make_config(tmp_path))
    with app.app_context():
        credentials.append(ADMIN_USERNAME, ADMIN_PASSWORD)
    return app


@pytest.fixture
def data_dir(app):
    return app.config["DATA_DIR"]


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """A client whose session already belongs to the admin user."""
    with client.session_transaction() as sess:
        sess["_user_id"] = ADMIN_USERNAME
        sess["_fresh"] = True
    return client


@pytest.fixture
def create_document(data_dir):
    def _create(name, content=""):
        mode = "wb" if isinstance(content, bytes) else "w"
        with open(os.path.join(data_dir, name), mode) as f:
            f.write(content)

    return _create


def flashed_messages(client):
    """Messages set by the last request and not yet shown on a page."""
    with client.session_transaction() as sess:
        return [message for _, message in sess.get("_flashes", [])]


def is_signed_in(client):
    with client.session_transaction() as sess:
        return "_user_id" in sess
