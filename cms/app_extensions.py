"""Flask extensions shared by the app factory and the blueprints."""

from __future__ import annotations

import os

from flask_login import LoginManager
from flask_wtf import CSRFProtect
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Every form posts a csrf_token field; CSRFProtect rejects POSTs without one
csrf = CSRFProtect()

login_manager = LoginManager()
login_manager.session_protection = 'basic'


def _default_rate_limit_storage() -> str:
    return os.getenv('RATE_LIMIT_STORAGE_URI', 'memory://')


# Only the sign-in form is limited; browsing and editing are not
limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=_default_rate_limit_storage(),
    default_limits=[]
)

__all__ = ["csrf", "limiter", "login_manager"]
