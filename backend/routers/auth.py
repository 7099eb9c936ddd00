from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import MagicLinkAuth, get_magic_link_auth
from core.responses import api_response
from db.database import get_async_session
from schemas.auth import EmailSubmission

router = APIRouter()


@router.post("/submit-email")
async def submit_email(
    request: Request,
    submission: EmailSubmission,
    auth: MagicLinkAuth = Depends(get_magic_link_auth),
):
    """Send a single-use sign-in link to the submitted address"""
    await auth.submit(submission.email)
    return api_response(request, message="Magic link sent")


@router.get("/magic-link")
async def magic_link(
    request: Request,
    token: str = Query(""),
    auth: MagicLinkAuth = Depends(get_magic_link_auth),
    db: AsyncSession = Depends(get_async_session),
):
    """Exchange a magic-link token for a session token"""
    session_token = await auth.redeem(db, token)
    return api_response(
        request,
        {"access_token": session_token},
        message="Authentication successful",
    )
