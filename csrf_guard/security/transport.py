from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status

from ..config import settings
from .csrf import CsrfToken, get_or_create_csrf_token, verify_csrf_token

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_csrf_secret() -> str:
    """FastAPI dependency yielding the CSRF secret; override in tests."""
    return settings.CSRF_SECRET


async def extract_csrf_from_request(request: Request) -> Optional[str]:
    """Get the submitted token from the header, falling back to the form body."""
    header = request.headers.get(settings.CSRF_HEADER_NAME)
    if header:
        return header
    content_type = request.headers.get("content-type", "").lower()
    if not content_type.startswith(FORM_CONTENT_TYPES):
        return None
    # Starlette caches the parsed form, so route Form(...) params still work
    form = await request.form()
    value = form.get(settings.CSRF_FORM_FIELD)
    return value if isinstance(value, str) else None


def set_csrf_cookie(response: Response, cookie_value: str) -> None:
    response.set_cookie(
        key=settings.CSRF_COOKIE_NAME,
        value=cookie_value,
        httponly=True,  # page gets the bare token; the cookie never needs JS
        secure=settings.CSRF_COOKIE_SECURE,
        samesite=settings.CSRF_COOKIE_SAMESITE,
        max_age=settings.CSRF_COOKIE_MAX_AGE,
        path="/",
    )


def issue_csrf_token(request: Request, response: Response, secret: str) -> CsrfToken:
    """Return the token for this client, setting the cookie only when it is new."""
    token, fresh = get_or_create_csrf_token(secret, request.cookies.get(settings.CSRF_COOKIE_NAME))
    if fresh:
        set_csrf_cookie(response, token.cookie)
    return token


async def csrf_verdict(request: Request, secret: str = Depends(get_csrf_secret)) -> bool:
    """FastAPI dependency returning the double-submit verdict for the request."""
    cookie_value = request.cookies.get(settings.CSRF_COOKIE_NAME)
    submitted = await extract_csrf_from_request(request)
    return verify_csrf_token(secret, cookie_value, submitted)


async def ensure_csrf(request: Request, valid: bool = Depends(csrf_verdict)) -> None:
    """FastAPI dependency rejecting state-changing requests that fail the check.

    Every failure reason maps to the same 403 so callers learn nothing about
    which part of the pair was wrong.
    """
    if not settings.CSRF_ENFORCE:
        return None
    if not valid:
        logger.warning("csrf rejected method=%s path=%s", request.method, request.url.path)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="CSRF token invalid")
    return None
