"""Gift domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import NotFound


class GiftNotFound(NotFound):
    """The requested gift does not exist or has been soft-deleted."""

    default_message = "Gift not found"
