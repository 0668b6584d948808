from typing import Tuple

from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from rest_framework.authtoken.models import Token

from core.enums import UserRole
from core.exceptions import BadRequestError, NotFoundError
from core.logging import configure_logger

logger = configure_logger("accounts.services")


class AccountService:
    """Registration, login and role management."""

    def __init__(self) -> None:
        self.user_model = get_user_model()

    def register(self, *, name: str, email: str, password: str, phone: str = "") -> Tuple[object, str]:
        email = self.user_model.objects.normalize_email(email).lower()
        if self.user_model.objects.filter(email__iexact=email).exists():
            raise BadRequestError("Email already registered.")

        with transaction.atomic():
            user = self.user_model.objects.create_user(
                username=email,
                email=email,
                password=password,
                name=name,
                phone=phone,
            )
            token = Token.objects.create(user=user)

        logger.info("Registered user id=%s", user.pk)
        return user, token.key

    def login(self, *, email: str, password: str) -> Tuple[object, str]:
        user = authenticate(username=email.lower(), password=password)
        if user is None:
            logger.warning("Failed login for %s", email)
            raise BadRequestError("Invalid credentials.")

        token, _ = Token.objects.get_or_create(user=user)
        return user, token.key

    def logout(self, user) -> None:
        Token.objects.filter(user=user).delete()

    def grant_role(self, *, email: str, role: UserRole):
        user = self.user_model.objects.filter(email__iexact=email).first()
        if user is None:
            raise NotFoundError(f"User '{email}' not found.")

        user.role = role.value
        user.save(update_fields=["role", "updated_at"])
        logger.info("User id=%s role set to %s", user.pk, role.value)
        return user
