"""
Bearer token authentication for API views.
"""
import functools

from flask import request

from recap.api.services import get_services
from recap.auth.accounts import AccountManager
from recap.errors import Unauthenticated


def bearer_token():
    """Extract the token from the Authorization header, if any."""
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def require_auth(view):
    """
    Authenticate the request and call the view with `auth` and `db`.

    The view runs inside the request's database session, which is committed
    when it returns and rolled back if it raises.
    """
    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        token = bearer_token()
        if token is None:
            raise Unauthenticated("Access token required")

        services = get_services()
        with services.session_scope() as db:
            auth = AccountManager(db, services.credentials).authenticate(token)
            return view(*args, auth=auth, db=db, **kwargs)

    return wrapper
