"""User and Address models.

``User`` is the project's ``AUTH_USER_MODEL``: e-mail is the login
identifier and is stored lower-cased.  Password hashing is Django's
(``set_password``); the raw password never reaches a log line or a response.
"""

from __future__ import annotations

from typing import Any

import structlog
from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.contrib.auth.models import PermissionsMixin
from django.core.validators import RegexValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)

PHONE_VALIDATOR = RegexValidator(r"^\d{10}$", "Phone number must be 10 digits")
ZIP_CODE_VALIDATOR = RegexValidator(r"^\d{5,6}$", "Valid ZIP code required")


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra: Any) -> User:
        if not email:
            raise ValueError("The e-mail address is required.")
        user = self.model(email=self.normalize_email(email).lower(), **extra)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra: Any) -> User:
        extra.setdefault("is_staff", False)
        extra.setdefault("is_superuser", False)
        return self._create_user(email, password, **extra)

    def create_superuser(self, email: str, password: str | None = None, **extra: Any) -> User:
        extra.setdefault("is_staff", True)
        extra.setdefault("is_superuser", True)
        return self._create_user(email, password, **extra)


class User(BaseModel, AbstractBaseUser, PermissionsMixin):
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=10, validators=[PHONE_VALIDATOR])
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    objects = UserManager()

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = ["name"]

    class Meta:
        db_table = "users"
        ordering = ["-created_at"]

    def save(self, *args, **kwargs) -> None:
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def __str__(self) -> str:
        return self.email


class AddressType(models.TextChoices):
    HOME = "home", "Home"
    WORK = "work", "Work"
    OTHER = "other", "Other"


class Address(BaseModel):
    """Saved delivery address.  Orders copy the address, never reference it."""

    user = models.ForeignKey(
        "accounts.User",
        on_delete=models.CASCADE,
        related_name="addresses",
    )
    type = models.CharField(max_length=10, choices=AddressType.choices, default=AddressType.HOME)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    state = models.CharField(max_length=100)
    zip_code = models.CharField(max_length=6, validators=[ZIP_CODE_VALIDATOR])
    is_default = models.BooleanField(default=False)

    class Meta:
        db_table = "user_addresses"
        ordering = ["created_at"]

    def __str__(self) -> str:
        return f"{self.address}, {self.city} ({self.type})"
