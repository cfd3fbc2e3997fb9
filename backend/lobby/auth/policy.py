"""Route auth policy helpers for fail-closed authorization.

Each helper wraps a route endpoint and sets the ``AUTH_POLICY_ATTR`` marker
so that startup validation can verify every route has an explicit auth policy.
"""

from __future__ import annotations

import functools
import inspect
from typing import TYPE_CHECKING

from starlette.authentication import requires
from starlette.routing import Mount, Route

if TYPE_CHECKING:
    import re
    from collections.abc import Callable
    from typing import Any

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.routing import BaseRoute

AUTH_POLICY_ATTR = "__auth_policy__"

PROTECTED_API = "protected_api"
PUBLIC = "public"


def protected_api(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Require a valid access token; raise 401 otherwise."""
    wrapped = requires("authenticated", status_code=401)(endpoint)
    setattr(wrapped, AUTH_POLICY_ATTR, PROTECTED_API)
    return wrapped


def public_route(endpoint: Callable[..., Any]) -> Callable[..., Any]:
    """Mark endpoint as explicitly public (no auth required).

    The marker lives on a thin wrapper, so reusing the same function on
    another route without wrapping does not leak the policy.
    """
    if not inspect.iscoroutinefunction(endpoint):
        raise TypeError(f"{endpoint.__name__} must be an async endpoint")

    @functools.wraps(endpoint)
    async def wrapper(request: Request, **kwargs: str) -> Response:
        return await endpoint(request, **kwargs)

    setattr(wrapper, AUTH_POLICY_ATTR, PUBLIC)
    return wrapper


def collect_protected_api_patterns(routes: list[BaseRoute]) -> list[re.Pattern[str]]:
    """Return the compiled path patterns of routes marked ``protected_api``.

    Patterns rather than path strings, so parametrized paths such as
    ``/api/rooms/{room_id}/join`` match concrete request paths.
    """
    return [
        route.path_regex
        for route in routes
        if isinstance(route, Route) and getattr(route.endpoint, AUTH_POLICY_ATTR, None) == PROTECTED_API
    ]


def validate_route_auth_policy(routes: list[BaseRoute]) -> None:
    """Verify every Route has an auth policy marker. Mount routes are exempt.

    Raises RuntimeError listing all unclassified routes if any are found.
    """
    unclassified: list[str] = []
    for route in routes:
        if isinstance(route, Mount):
            continue
        if isinstance(route, Route) and not hasattr(route.endpoint, AUTH_POLICY_ATTR):
            name = route.name or getattr(route.endpoint, "__name__", "unknown")
            unclassified.append(f"{route.path} ({name})")

    if unclassified:
        details = ", ".join(unclassified)
        msg = f"Unclassified routes missing auth policy: {details}"
        raise RuntimeError(msg)
