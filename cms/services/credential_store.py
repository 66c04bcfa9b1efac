"""
YAML credential store.

The credential file is a flat mapping of username to bcrypt hash::

    admin: $2b$12$...
    editor: $2b$12$...

It is re-read on every lookup so edits made with manage_users.py take effect
without restarting the server.
"""

import os
from typing import Dict

import yaml
from passlib.context import CryptContext

from config.improved_logging_config import get_smart_logger, LogCategory

logger = get_smart_logger(__name__, LogCategory.SECURITY)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class CredentialFileError(Exception):
    """The credential file exists but is not a username -> hash mapping"""


class CredentialStore:
    def __init__(self, users_path: str):
        self.users_path = users_path

    def load_users(self) -> Dict[str, str]:
        if not os.path.exists(self.users_path):
            logger.warning("Credential file missing; run 'python manage_users.py add USERNAME'",
                           context={'path': self.users_path})
            return {}
        with open(self.users_path, encoding='utf-8') as f:
            users = yaml.safe_load(f)
        if users is None:
            return {}
        if not isinstance(users, dict):
            raise CredentialFileError(f'{self.users_path} must map usernames to password hashes')
        return {str(username): str(hashed) for username, hashed in users.items()}

    def save_users(self, users: Dict[str, str]):
        with open(self.users_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(users, f, default_flow_style=False, sort_keys=True)

    def has_user(self, username: str) -> bool:
        return bool(username) and username in self.load_users()

    def hash_password(self, password: str) -> str:
        return pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            logger.security_event("Unreadable password hash in credential file")
            return False

    def valid_credentials(self, username: str, password: str) -> bool:
        if not username or not password:
            return False
        hashed_password = self.load_users().get(username)
        if hashed_password is None:
            return False
        return self.verify_password(password, hashed_password)
