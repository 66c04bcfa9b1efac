"""
CMS Configuration Module
"""

import os
import secrets
from dataclasses import dataclass, field

CMS_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


@dataclass
class ServerConfig:
    """Server configuration settings"""
    host: str = '0.0.0.0'
    port: int = 5000
    debug: bool = True
    # A fresh key per process signs everyone out on restart; set FLASK_SECRET_KEY to persist sessions
    secret_key: str = field(default_factory=lambda: secrets.token_hex(32))

    # Storage
    data_path: str = os.path.join(CMS_ROOT, 'data')
    users_path: str = os.path.join(CMS_ROOT, 'users.yml')

    # Security settings
    session_cookie_secure: bool = False
    session_cookie_httponly: bool = True
    session_cookie_samesite: str = 'Lax'
    session_timeout_seconds: int = 86400
    force_https: bool = False
    strict_transport_security: bool = False
    signin_rate_limit: str = '15 per minute'

    # Documents are small text files; anything larger is a mistake
    max_content_length: int = 2 * 1024 * 1024  # 2MB


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


def get_server_config() -> ServerConfig:
    """Get server configuration from environment or defaults"""

    session_timeout_env = os.getenv('SESSION_TIMEOUT_SECONDS')
    timeout_seconds = int(session_timeout_env) if session_timeout_env else 86400

    return ServerConfig(
        host=os.getenv('FLASK_HOST', '0.0.0.0'),
        port=int(os.getenv('FLASK_PORT', 5000)),
        debug=_env_flag('FLASK_DEBUG', 'True'),
        secret_key=os.getenv('FLASK_SECRET_KEY') or secrets.token_hex(32),
        data_path=os.getenv('CMS_DATA_PATH', os.path.join(CMS_ROOT, 'data')),
        users_path=os.getenv('CMS_USERS_PATH', os.path.join(CMS_ROOT, 'users.yml')),
        session_cookie_secure=_env_flag('SESSION_COOKIE_SECURE', 'False'),
        force_https=_env_flag('FORCE_HTTPS', 'False'),
        strict_transport_security=_env_flag('STRICT_TRANSPORT_SECURITY', 'False'),
        session_cookie_samesite=os.getenv('SESSION_COOKIE_SAMESITE', 'Lax'),
        session_timeout_seconds=timeout_seconds,
        signin_rate_limit=os.getenv('SIGNIN_RATE_LIMIT', '15 per minute'),
    )
