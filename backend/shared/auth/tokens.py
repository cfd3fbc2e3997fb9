"""HMAC-SHA256 signed access tokens issued at login.

The HTTP layer verifies tokens locally with the shared secret, so no session
state is kept on the server.

Token format: base64url(json_payload_bytes).base64url(hmac_sha256_signature)
"""

import base64
import binascii
import hashlib
import hmac
import json
import math
import time
from dataclasses import asdict, dataclass

import structlog

logger = structlog.get_logger()

_TOKEN_PARTS = 2

DEFAULT_TOKEN_TTL_SECONDS = 86400  # 24 hours
CLOCK_SKEW_SECONDS = 60


@dataclass(frozen=True)
class AccessToken:
    """Claims carried inside a signed access token."""

    player_id: str
    login: str
    issued_at: float
    expires_at: float


def issue_access_token(player_id: str, login: str, secret: str, ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS) -> str:
    """Create and sign a token for a freshly authenticated player."""
    now = time.time()
    token = AccessToken(player_id=player_id, login=login, issued_at=now, expires_at=now + ttl_seconds)
    return sign_access_token(token, secret)


def sign_access_token(token: AccessToken, secret: str) -> str:
    payload_bytes = json.dumps(asdict(token), sort_keys=True).encode()
    sig = hmac.new(secret.encode(), payload_bytes, hashlib.sha256).digest()
    return f"{base64.urlsafe_b64encode(payload_bytes).decode()}.{base64.urlsafe_b64encode(sig).decode()}"


def verify_access_token(raw: str, secret: str, max_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS) -> AccessToken | None:
    """Verify signature and lifetime. Returns the claims, or None on any failure."""
    parts = raw.split(".")
    if len(parts) != _TOKEN_PARTS:
        return None

    try:
        payload_bytes = base64.urlsafe_b64decode(parts[0])
        provided_sig = base64.urlsafe_b64decode(parts[1])
    except (ValueError, binascii.Error):
        return None

    expected_sig = hmac.new(secret.encode(), payload_bytes, hashlib.sha256).digest()
    if not hmac.compare_digest(provided_sig, expected_sig):
        logger.debug("access token signature mismatch")
        return None

    try:
        token = AccessToken(**json.loads(payload_bytes))
    except (json.JSONDecodeError, TypeError, UnicodeDecodeError):
        logger.debug("access token malformed payload")
        return None

    if not _has_valid_lifetime(token, max_ttl_seconds):
        return None
    return token


def _is_finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _has_valid_lifetime(token: AccessToken, max_ttl_seconds: int) -> bool:
    """Reject tokens issued in the future, living longer than allowed, or already expired."""
    if not _is_finite_number(token.issued_at) or not _is_finite_number(token.expires_at):
        logger.debug("access token non-finite timestamp")
        return False

    now = time.time()
    if token.issued_at > now + CLOCK_SKEW_SECONDS:
        logger.debug("access token issued in the future")
        return False
    if token.expires_at <= token.issued_at:
        return False
    if token.expires_at - token.issued_at > max_ttl_seconds + CLOCK_SKEW_SECONDS:
        logger.debug("access token lifetime too long")
        return False
    if now > token.expires_at:
        logger.debug("access token expired")
        return False
    return True
