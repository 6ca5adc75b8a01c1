from typing import Optional

from jose import JWTError, jwt


def verify_jwt(token: str, secret: str, algorithm: str = "HS256") -> Optional[dict]:
    """
    Verify and decode JWT token

    Tokens are issued by the identity provider; this service only
    checks them.

    Args:
        token: JWT token string
        secret: Shared signing secret
        algorithm: Signing algorithm

    Returns:
        Decoded payload dict or None if invalid
    """
    try:
        payload = jwt.decode(token, secret, algorithms=[algorithm])
        return payload
    except JWTError:
        return None
