"""Utilities for turning Firebase ID tokens into user ids."""

from __future__ import annotations

from typing import TYPE_CHECKING

from firebase_admin import auth

from socialbingo.errors import IdentityError

if TYPE_CHECKING:
    from flask import Request

BEARER_PREFIX = "Bearer "


def bearer_token(request: Request) -> str | None:
    """Pull the ID token from the Authorization header.

    ``EventSource`` cannot set headers, so a ``token`` query argument is
    accepted as well.
    """
    header = request.headers.get("Authorization", "")
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX) :].strip() or None
    return request.args.get("token") or None


def resolve_identity(id_token: str | None) -> str:
    """Verify an ID token and return its stable uid."""
    if not id_token:
        raise IdentityError("Sign in before joining a game.")
    try:
        decoded_token = auth.verify_id_token(id_token)
    except auth.CertificateFetchError as e:
        raise IdentityError("The sign-in service is unavailable. Try again.") from e
    except (ValueError, auth.InvalidIdTokenError) as e:
        raise IdentityError("Your sign-in has expired or is invalid.") from e
    return decoded_token["uid"]
