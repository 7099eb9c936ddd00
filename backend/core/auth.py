"""
Magic-link authentication.

submit:        email -> signed short-lived link token, sent by email
redeem:        link token -> session token (each link token works once)
authenticate:  bearer session token -> email (stateless, signature + expiry)
"""

import logging
from typing import Optional, Protocol
from urllib.parse import urlencode

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.errors import AuthError, ValidationError
from core.mailer import get_mailer
from core.security import MAGIC_LINK_AUDIENCE, SESSION_AUDIENCE, TokenSigner, get_token_signer
from db.consumed_token import ConsumedToken
from db.users import User

logger = logging.getLogger(__name__)

_email_adapter = TypeAdapter(EmailStr)
bearer_scheme = HTTPBearer(auto_error=False)


class Mailer(Protocol):
    async def send(self, address: str, link: str) -> None: ...


def validate_email(email: str) -> str:
    try:
        return _email_adapter.validate_python((email or "").strip())
    except PydanticValidationError:
        raise ValidationError("Invalid email format", field="email")


def build_magic_link(frontend_url: str, token: str) -> str:
    separator = "&" if "?" in frontend_url else "?"
    return f"{frontend_url}{separator}{urlencode({'token': token})}"


class MagicLinkAuth:
    def __init__(self, signer: TokenSigner, settings: Settings, mailer: Mailer):
        self.signer = signer
        self.settings = settings
        self.mailer = mailer

    async def submit(self, email: str) -> None:
        """Email a single-use sign-in link to ``email``."""
        address = validate_email(email)
        token = self.signer.issue_magic_link_token(address, self.settings.magic_link_lifetime_seconds)
        link = build_magic_link(self.settings.frontend_url, token)
        await self.mailer.send(address, link)
        logger.info(f"Issued magic link for {address}")

    async def redeem(self, db: AsyncSession, token: str) -> str:
        """Consume a magic-link token and return a fresh session token."""
        if not token:
            raise ValidationError("Token is required", field="token")

        claims = self.signer.verify(token, MAGIC_LINK_AUDIENCE)
        email = claims["email"]
        jti = claims.get("jti")
        if not jti:
            raise AuthError("Invalid or expired token")

        used = await db.execute(select(ConsumedToken.jti).where(ConsumedToken.jti == jti))
        if used.scalar_one_or_none() is not None:
            raise AuthError("Token already used")

        session_token = self.signer.issue_session_token(email, self.settings.session_lifetime_seconds)

        user = (await db.execute(select(User).where(User.email == email))).scalar_one_or_none()
        # The consumed_tokens primary key makes the second of two racing redemptions fail
        db.add(ConsumedToken(jti=jti, email=email))
        if user is not None:
            user.access_token = token
        else:
            db.add(User(email=email, access_token=token))
        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise AuthError("Token already used")

        logger.info(f"Magic link redeemed for {email}")
        return session_token


def get_magic_link_auth(
    signer: TokenSigner = Depends(get_token_signer),
    settings: Settings = Depends(get_settings),
    mailer=Depends(get_mailer),
) -> MagicLinkAuth:
    return MagicLinkAuth(signer, settings, mailer)


async def current_user_email(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    signer: TokenSigner = Depends(get_token_signer),
) -> str:
    """Authenticate the bearer session token and expose its email to handlers."""
    if credentials is None or not credentials.credentials:
        raise AuthError("Authorization token required", field="authorization")

    claims = signer.verify(credentials.credentials, SESSION_AUDIENCE)
    request.state.user_email = claims["email"]
    return claims["email"]
