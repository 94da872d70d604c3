# Security utilities package

from .csrf import (
    CsrfToken,
    create_hash_with_secret,
    create_csrf_token,
    get_or_create_csrf_token,
    verify_csrf_token,
)
from .transport import (
    csrf_verdict,
    ensure_csrf,
    extract_csrf_from_request,
    get_csrf_secret,
    issue_csrf_token,
    set_csrf_cookie,
)

__all__ = [
    "CsrfToken",
    "create_hash_with_secret",
    "create_csrf_token",
    "get_or_create_csrf_token",
    "verify_csrf_token",
    "csrf_verdict",
    "ensure_csrf",
    "extract_csrf_from_request",
    "get_csrf_secret",
    "issue_csrf_token",
    "set_csrf_cookie",
]
