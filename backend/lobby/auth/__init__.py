"""Lobby authentication: bearer token backend, user model, and route policy."""

from lobby.auth.backend import BearerTokenBackend
from lobby.auth.models import AuthenticatedPlayer
from lobby.auth.policy import (
    collect_protected_api_patterns,
    protected_api,
    public_route,
    validate_route_auth_policy,
)

__all__ = [
    "AuthenticatedPlayer",
    "BearerTokenBackend",
    "collect_protected_api_patterns",
    "protected_api",
    "public_route",
    "validate_route_auth_policy",
]
