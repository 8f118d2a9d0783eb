"""Decorators for identity-protected routes."""

from functools import wraps

from flask import g, request

from .utils import bearer_token, resolve_identity


def identity_required(f):
    """Resolve the caller's uid into ``g.uid`` or fail with an IdentityError.

    Usage:
    @identity_required
    def protected_view():
        ...
    """

    @wraps(f)
    def decorated_function(*args, **kwargs):
        g.uid = resolve_identity(bearer_token(request))
        return f(*args, **kwargs)

    return decorated_function
