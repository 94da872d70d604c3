"""Double-submit cookie CSRF tokens.

The cookie value is ``token|hash`` where ``token`` is 32 random bytes in hex
and ``hash`` is sha256(token + secret). The page gets the bare token (hidden
field, meta tag or header) and a request passes only when the submitted
token equals the one embedded in the cookie and the hash still matches under
the current secret. Without the secret an attacker cannot mint a cookie that
verifies.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets
from typing import NamedTuple, Optional

COOKIE_SEPARATOR = "|"
TOKEN_BYTES = 32


class CsrfToken(NamedTuple):
    cookie: str
    csrf_token: str


def _encode(value: str) -> bytes:
    # surrogatepass: lone surrogates from decoded input must not raise
    return value.encode("utf-8", "surrogatepass")


def create_hash_with_secret(secret: str, csrf_token: str) -> str:
    """Return sha256 hex of token followed by secret (order matters)."""
    return hashlib.sha256(_encode(f"{csrf_token}{secret}")).hexdigest()


def create_csrf_token(secret: str) -> CsrfToken:
    """Issue a new random token and the cookie value binding it to the secret."""
    csrf_token = secrets.token_hex(TOKEN_BYTES)
    csrf_token_hash = create_hash_with_secret(secret, csrf_token)
    cookie = f"{csrf_token}{COOKIE_SEPARATOR}{csrf_token_hash}"
    return CsrfToken(cookie=cookie, csrf_token=csrf_token)


def _split_cookie(cookie_value: Optional[str]) -> Optional[tuple[str, str]]:
    if not cookie_value:
        return None
    csrf_token, sep, csrf_token_hash = cookie_value.partition(COOKIE_SEPARATOR)
    if not sep or not csrf_token:
        return None
    return csrf_token, csrf_token_hash


def _equals(a: str, b: str) -> bool:
    # compare_digest rejects non-ASCII str
    return hmac.compare_digest(_encode(a), _encode(b))


def _hash_matches(secret: str, csrf_token: str, csrf_token_hash: str) -> bool:
    return _equals(csrf_token_hash, create_hash_with_secret(secret, csrf_token))


def verify_csrf_token(
    secret: str,
    cookie_value: Optional[str] = None,
    body_value: Optional[str] = None,
) -> bool:
    """Check the submitted token against the cookie and the secret.

    Missing cookie, missing submitted value, a cookie without a separator,
    a token mismatch and a hash mismatch all give the same ``False``.
    """
    if not cookie_value or not body_value:
        return False

    parts = _split_cookie(cookie_value)
    if parts is None:
        return False
    csrf_token, csrf_token_hash = parts

    # Evaluate both so the outcome takes the same path for every failure
    token_ok = _equals(csrf_token, body_value)
    hash_ok = _hash_matches(secret, csrf_token, csrf_token_hash)
    return token_ok and hash_ok


def get_or_create_csrf_token(
    secret: str, cookie_value: Optional[str] = None
) -> tuple[CsrfToken, bool]:
    """Reuse the token from a still-valid cookie, otherwise issue a new one.

    Returns ``(token, fresh)``; ``fresh`` is False when the cookie was reused
    and so does not need to be set again.

    Keeps several open pages working with the same cookie instead of
    rotating the token on every render.
    """
    parts = _split_cookie(cookie_value)
    if parts is not None:
        csrf_token, csrf_token_hash = parts
        if _hash_matches(secret, csrf_token, csrf_token_hash):
            return CsrfToken(cookie=cookie_value, csrf_token=csrf_token), False
    return create_csrf_token(secret), True
