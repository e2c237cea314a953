"""Bearer token validation for tokens issued by the external identity provider."""

from jose import JWTError, jwt
from org_roster.config import settings
from org_roster.core.exceptions import UnauthorizedException


def decode_access_token(token: str) -> dict:
    """
    Decode and validate an identity provider access token.

    The roster never issues tokens itself; it only verifies the signature
    with the shared SECRET_KEY and checks the claims it relies on.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub' (auth user id), 'exp', etc.

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    options = {"verify_aud": settings.JWT_AUDIENCE is not None}
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            options=options,
        )
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")

    # jose only checks expiration when the claim is present
    if payload.get("exp") is None:
        raise UnauthorizedException("Token missing expiration")

    if not payload.get("sub"):
        raise UnauthorizedException("Token missing user identifier")

    return payload


def extract_auth_user_id(token: str) -> str:
    """Return the identity provider's user id ('sub' claim)"""
    return decode_access_token(token)["sub"]
