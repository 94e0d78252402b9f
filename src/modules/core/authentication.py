"""Caller identity resolution.

Authentication itself is delegated to SimpleJWT
(``rest_framework_simplejwt.authentication.JWTAuthentication``).  Services
never see the request: views hand them an opaque caller id obtained here, or
``None`` when the request is anonymous.
"""

from __future__ import annotations

from typing import Optional

from rest_framework.request import Request


def resolve_caller_id(request: Request) -> Optional[str]:
    """Return the authenticated user's id as a string, or ``None``."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None
    return str(user.pk)
