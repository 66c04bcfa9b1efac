import pytest
import yaml
from flask_login import FlaskLoginClient

from app import create_app
from services.auth_models import User
from services.credential_store import pwd_context

ABOUT_CONTENT = """# Python is...
## a programming language that is natural to read and easy to write.
"""
CHANGES_CONTENT = "This is the changes page."
HISTORY_CONTENT = "Python 0.9.0 released"


@pytest.fixture(scope='session')
def admin_password_hash():
    # bcrypt is deliberately slow; hash once per test run
    return pwd_context.hash('secret')


@pytest.fixture
def data_path(tmp_path):
    path = tmp_path / 'data'
    path.mkdir()
    (path / 'about.md').write_text(ABOUT_CONTENT, encoding='utf-8')
    (path / 'changes.txt').write_text(CHANGES_CONTENT, encoding='utf-8')
    (path / 'history.txt').write_text(HISTORY_CONTENT, encoding='utf-8')
    return path


@pytest.fixture
def users_path(tmp_path, admin_password_hash):
    path = tmp_path / 'users.yml'
    path.write_text(yaml.safe_dump({'admin': admin_password_hash}), encoding='utf-8')
    return path


@pytest.fixture
def app_config(data_path, users_path):
    return {
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'DATA_PATH': str(data_path),
        'USERS_PATH': str(users_path),
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
    }


@pytest.fixture
def app(app_config):
    app = create_app(app_config)
    app.test_client_class = FlaskLoginClient  # Use FlaskLoginClient for signed-in requests
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    return app.test_client(user=User('admin'))


def flashed_messages(client):
    """Flash messages waiting in the client's session cookie."""
    with client.session_transaction() as sess:
        return [message for _category, message in sess.get('_flashes', [])]


def signed_in_username(client):
    with client.session_transaction() as sess:
        return sess.get('_user_id')
