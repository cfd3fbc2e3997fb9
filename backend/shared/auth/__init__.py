"""Player authentication: password hashing, access tokens, registration and login."""

from shared.auth.password import BcryptHasher, PasswordHasher, SimpleHasher, get_hasher
from shared.auth.service import AuthError, AuthService
from shared.auth.settings import AuthSettings
from shared.auth.tokens import AccessToken, issue_access_token, sign_access_token, verify_access_token

__all__ = [
    "AccessToken",
    "AuthError",
    "AuthService",
    "AuthSettings",
    "BcryptHasher",
    "PasswordHasher",
    "SimpleHasher",
    "get_hasher",
    "issue_access_token",
    "sign_access_token",
    "verify_access_token",
]
