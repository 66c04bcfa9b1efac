import logging
import os
from datetime import timedelta

from flask import Flask, current_app, flash, g, redirect, render_template, request, url_for
from flask_login import current_user
from flask_wtf.csrf import CSRFError

from config import get_server_config
from config.improved_logging_config import configure_app_logging, get_smart_logger, LogCategory
from utils.request_response_logger import setup_flask_request_logging
from app_extensions import csrf, limiter, login_manager
from services.auth_models import User
from services.credential_store import CredentialStore

import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

logger = get_smart_logger(__name__, LogCategory.API)

SENTRY_DSN = os.getenv('SENTRY_DSN')
if SENTRY_DSN:
    sentry_logging = LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)
    sentry_sdk.init(
        dsn=SENTRY_DSN,
        integrations=[FlaskIntegration(), sentry_logging],
        traces_sample_rate=float(os.getenv('SENTRY_TRACES_SAMPLE_RATE', '0')),
    )

SIGNIN_REQUIRED_MESSAGE = 'You must be signed in to do that.'


def create_app(test_config=None):
    """Create and configure the Flask server for the CMS."""
    server = Flask(__name__)

    server_config = get_server_config()
    configure_app_logging(debug=server_config.debug)

    # Security-sensitive config must exist before extensions initialize
    server.secret_key = server_config.secret_key
    if not os.getenv('FLASK_SECRET_KEY'):
        logger.warning("FLASK_SECRET_KEY not set; sessions will not survive a restart or span workers")
    server.config['DATA_PATH'] = server_config.data_path
    server.config['USERS_PATH'] = server_config.users_path
    server.config['SIGNIN_RATE_LIMIT'] = server_config.signin_rate_limit
    server.config['MAX_CONTENT_LENGTH'] = server_config.max_content_length
    server.config['SESSION_COOKIE_HTTPONLY'] = True
    server.config['SESSION_COOKIE_SECURE'] = bool(server_config.force_https or server_config.session_cookie_secure)
    samesite_policy = server_config.session_cookie_samesite or 'Lax'
    if server_config.force_https:
        server.config['PREFERRED_URL_SCHEME'] = 'https'
    server.config['SESSION_COOKIE_SAMESITE'] = samesite_policy
    server.config['SESSION_COOKIE_NAME'] = 'cms_session'
    server.config['PERMANENT_SESSION_LIFETIME'] = timedelta(seconds=server_config.session_timeout_seconds)

    # CSRF defaults (overridable via test_config)
    server.config.setdefault('WTF_CSRF_ENABLED', True)
    server.config.setdefault('WTF_CSRF_TIME_LIMIT', 3600)

    if test_config:
        server.config.from_mapping(test_config)

    # Initialize extensions that depend on the configured Flask app
    csrf.init_app(server)
    limiter.init_app(server)
    login_manager.init_app(server)

    @login_manager.user_loader
    def load_user(user_id):
        # Users removed from the credential file lose their session on the next request
        if CredentialStore(current_app.config['USERS_PATH']).has_user(user_id):
            return User(user_id)
        return None

    @login_manager.unauthorized_handler
    def unauthorized():
        logger.security_event("Unauthenticated access", f"{request.method} {request.path}")
        flash(SIGNIN_REQUIRED_MESSAGE)
        return redirect(url_for('documents_bp.index'))

    @server.errorhandler(CSRFError)
    def csrf_error(error):
        # Signed-out edits get the sign-in redirect, not a bare 400
        if not current_user.is_authenticated and request.blueprint != 'auth_bp':
            return unauthorized()
        logger.security_event("CSRF validation failed", f"{request.method} {request.path} - {error.description}")
        return render_template('error.html', status_code=400,
                               message='The form has expired. Reload the page and try again.'), 400

    @server.errorhandler(404)
    def not_found(error):
        return render_template('error.html', status_code=404,
                               message='The requested URL was not found on the server.'), 404

    @server.errorhandler(405)
    def method_not_allowed(error):
        return render_template('error.html', status_code=405,
                               message='The method is not allowed for the requested URL.'), 405

    @server.errorhandler(429)
    def too_many_requests(error):
        logger.security_event("Rate limit exceeded", f"{request.method} {request.path}")
        return render_template('error.html', status_code=429,
                               message='Too many attempts. Try again later.'), 429

    @server.errorhandler(500)
    def internal_server_error(error):
        logger.error(f'Internal Server Error: {error}',
                     context={'request_id': getattr(g, 'correlation_id', 'unknown')})
        return render_template('error.html', status_code=500,
                               message='An unexpected error occurred on the server.'), 500

    @server.after_request
    def add_security_headers(response):
        csp_policy = (
            "default-src 'self'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data: https:; "
            "frame-ancestors 'none'; "
            "base-uri 'self'; "
            "form-action 'self';"
        )
        response.headers['Content-Security-Policy'] = csp_policy
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        if server_config.strict_transport_security:
            response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    # Setup request/response logging middleware
    setup_flask_request_logging(server)

    # Register blueprints here
    from api.auth import auth_bp
    from api.documents import documents_bp

    server.register_blueprint(auth_bp, url_prefix='/users')
    server.register_blueprint(documents_bp)

    logger.info(f"Flask server created; documents served from {server.config['DATA_PATH']}")

    return server


if __name__ == '__main__':
    app = create_app()
    server_config = get_server_config()

    logger.info(f"Starting CMS server on port {server_config.port}")
    logger.info(f"Debug mode: {server_config.debug}")

    app.run(debug=server_config.debug, port=server_config.port, host=server_config.host)
