from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for
from flask_login import login_user, logout_user

from app_extensions import limiter
from config.improved_logging_config import get_smart_logger, LogCategory
from services.auth_models import User
from services.credential_store import CredentialStore

logger = get_smart_logger(__name__, LogCategory.SECURITY)

auth_bp = Blueprint('auth_bp', __name__)


def _signin_rate_limit() -> str:
    return current_app.config['SIGNIN_RATE_LIMIT']


@auth_bp.route('/signin', methods=['GET'])
def signin_form():
    return render_template('signin.html')


@auth_bp.route('/signin', methods=['POST'])
@limiter.limit(_signin_rate_limit)
def signin():
    username = request.form.get('username', '').strip()
    password = request.form.get('password', '')
    client_ip = request.remote_addr or 'unknown'

    credential_store = CredentialStore(current_app.config['USERS_PATH'])
    if not credential_store.valid_credentials(username, password):
        logger.security_event("Failed sign-in", f"user={username!r} ip={client_ip}")
        flash('Invalid credentials')
        return render_template('signin.html', username=username), 422

    # Drop whatever the anonymous session carried before binding it to a user
    session.clear()
    login_user(User(username))
    logger.info(f"User {username} signed in from {client_ip}")
    flash('Welcome')
    return redirect(url_for('documents_bp.index'))


@auth_bp.route('/signout', methods=['POST'])
def signout():
    logout_user()
    flash('You have been signed out.')
    return redirect(url_for('documents_bp.index'))
