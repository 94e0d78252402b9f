"""Unit tests for AccountService."""

from __future__ import annotations

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from modules.accounts.dtos import LoginDTO, RegisterUserDTO
from modules.accounts.exceptions import EmailAlreadyRegistered, InvalidCredentials
from modules.accounts.models import User
from modules.accounts.repositories.django_repository import UserDjangoRepository
from modules.accounts.services import AccountService
from modules.core.exceptions import NotFound

pytestmark = pytest.mark.unit


@pytest.fixture()
def service():
    return AccountService(UserDjangoRepository())


def _register_dto(**overrides):
    data = {
        "name": "Priya Patel",
        "email": "Priya@Example.com",
        "password": "hunter22",
        "phone": "9876543210",
        "addresses": [
            {"address": "12 MG Road", "city": "Bengaluru", "state": "Karnataka", "zipCode": "560001", "isDefault": True}
        ],
    }
    data.update(overrides)
    return RegisterUserDTO.model_validate(data)


class TestRegister:
    def test_creates_user_with_hashed_password(self, service):
        user = service.register(_register_dto())

        assert user.email == "priya@example.com"
        assert user.password != "hunter22"
        assert user.check_password("hunter22")
        assert user.addresses.get().zip_code == "560001"

    def test_duplicate_email_is_a_conflict(self, service):
        service.register(_register_dto())

        with pytest.raises(EmailAlreadyRegistered):
            service.register(_register_dto(email="PRIYA@example.com"))

        assert User.objects.count() == 1


class TestLogin:
    def test_issues_tokens_for_the_user(self, service, make_user):
        user = make_user(email="login@example.com", password="right-pass")

        found, tokens = service.login(LoginDTO(email="login@example.com", password="right-pass"))

        assert found == user
        assert str(AccessToken(tokens.access)["user_id"]) == str(user.id)
        assert tokens.refresh

    @pytest.mark.parametrize(
        "email, password",
        [("login@example.com", "wrong-pass"), ("nobody@example.com", "right-pass")],
    )
    def test_bad_credentials_are_indistinguishable(self, service, make_user, email, password):
        make_user(email="login@example.com", password="right-pass")

        with pytest.raises(InvalidCredentials) as exc_info:
            service.login(LoginDTO(email=email, password=password))

        assert exc_info.value.message == "Invalid email or password"

    def test_inactive_user_cannot_login(self, service, make_user):
        make_user(email="gone@example.com", password="right-pass", is_active=False)

        with pytest.raises(InvalidCredentials):
            service.login(LoginDTO(email="gone@example.com", password="right-pass"))


class TestGetUser:
    def test_unknown_user(self, service):
        with pytest.raises(NotFound):
            service.get_user("not-a-uuid")
