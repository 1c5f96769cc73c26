from jose import JWTError, jwt
from household_hub.config import settings
from household_hub.core.exceptions import UnauthorizedException


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using shared SECRET_KEY.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub', 'exp' and optional 'email'/'name'

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")

    if payload.get("exp") is None:
        raise UnauthorizedException("Token missing expiration")

    if payload.get("sub") is None:
        raise UnauthorizedException("Token missing user identifier")

    return payload


def extract_identity(token: str) -> tuple[str, str | None]:
    """
    Extract (email, display name) from JWT token.

    The 'email' claim wins over 'sub' when both are present.
    """
    payload = decode_jwt(token)
    email = payload.get("email") or payload["sub"]
    return email.strip().lower(), payload.get("name")


def is_email_allowed(email: str) -> bool:
    """Check the ALLOWED_EMAILS allowlist (an empty list allows everyone)"""
    allowed = settings.allowed_emails_list
    return not allowed or email.lower() in allowed
