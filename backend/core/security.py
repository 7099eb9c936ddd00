import secrets
from typing import Any, Dict, Optional

import jwt
from fastapi import Depends
from fastapi_users.jwt import decode_jwt, generate_jwt

from core.config import Settings, get_settings
from core.errors import AuthError

MAGIC_LINK_AUDIENCE = "inventory:magic-link"
SESSION_AUDIENCE = "inventory:session"


class TokenSigner:
    """Signs and verifies HMAC tokens carrying an email claim.

    The secret is handed in explicitly so tests can use isolated keys and the
    production key can be rotated through configuration.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self.algorithm = algorithm

    def sign(
        self,
        email: str,
        audience: str,
        lifetime_seconds: int,
        extra: Optional[Dict[str, Any]] = None,
    ) -> str:
        data = {"email": email, "aud": [audience]}
        if extra:
            data.update(extra)
        return generate_jwt(data, self._secret, lifetime_seconds, algorithm=self.algorithm)

    def verify(self, token: str, audience: str) -> Dict[str, Any]:
        # Bad signature, wrong audience and expiry all look the same to the caller
        try:
            claims = decode_jwt(token, self._secret, [audience], algorithms=[self.algorithm])
        except jwt.PyJWTError:
            raise AuthError("Invalid or expired token")
        if not claims.get("email"):
            raise AuthError("Invalid or expired token")
        return claims

    def issue_magic_link_token(self, email: str, lifetime_seconds: int) -> str:
        # jti keeps two links requested within the same second distinct
        return self.sign(email, MAGIC_LINK_AUDIENCE, lifetime_seconds, {"jti": secrets.token_urlsafe(16)})

    def issue_session_token(self, email: str, lifetime_seconds: int) -> str:
        return self.sign(email, SESSION_AUDIENCE, lifetime_seconds)


def get_token_signer(settings: Settings = Depends(get_settings)) -> TokenSigner:
    return TokenSigner(settings.jwt_secret, settings.jwt_algorithm)
