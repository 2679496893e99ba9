from functools import wraps

from flask import current_app, request

from bidarena import bcrypt
from bidarena.services.game.errors import Unauthorized


def hash_admin_secret(secret: str) -> str:
    return bcrypt.generate_password_hash(secret).decode('utf-8')


def check_admin_secret(supplied) -> None:
    """Raise Unauthorized unless admin auth is off or the secret matches."""
    cfg = current_app.config
    if not cfg.get('ADMIN_AUTH_ENABLED', True):
        return
    if not isinstance(supplied, str) or not supplied:
        raise Unauthorized('Invalid admin password')
    if not bcrypt.check_password_hash(cfg['ADMIN_SECRET_HASH'], supplied):
        raise Unauthorized('Invalid admin password')


def _supplied_secret():
    header = request.headers.get('X-Admin-Secret')
    if header:
        return header
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data.get('password')
    return None


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            check_admin_secret(_supplied_secret())
        except Unauthorized:
            current_app.logger.warning(f'[admin] rejected {request.method} {request.path}')
            raise
        return view(*args, **kwargs)
    return wrapper
