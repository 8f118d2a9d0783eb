"""Identity resolution for incoming requests."""

from .decorators import identity_required
from .utils import bearer_token, resolve_identity

__all__ = ["bearer_token", "identity_required", "resolve_identity"]
