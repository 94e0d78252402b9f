"""Account domain exceptions."""

from __future__ import annotations

from modules.core.exceptions import Conflict, Unauthenticated


class EmailAlreadyRegistered(Conflict):
    default_message = "Email already in use"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid email or password"
