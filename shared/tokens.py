"""
Access-token verification (framework-agnostic).

Tokens are issued by the accounts service; this module only verifies them
and extracts the owner id from the ``sub`` claim.
"""

from __future__ import annotations

import jwt
from bson import ObjectId

from config import JWTSettings
from errors import AuthenticationError


def verify_access_token(token: str, settings: JWTSettings) -> dict:
    """Decode and verify *token*; raise AuthenticationError on any failure."""
    key = settings.verification_key
    if not key:
        raise AuthenticationError("Token verification is not configured")
    try:
        return jwt.decode(
            token,
            key,
            algorithms=[settings.algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Access token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid access token")


def owner_id_from_token(token: str, settings: JWTSettings) -> ObjectId:
    claims = verify_access_token(token, settings)
    subject = claims.get("sub")
    if not isinstance(subject, str) or not ObjectId.is_valid(subject):
        raise AuthenticationError("Invalid access token")
    return ObjectId(subject)
