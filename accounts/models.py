from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from core.enums import UserRole
from core.models import TimeStampedModel


class MarketplaceUserManager(UserManager):
    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", UserRole.ADMIN.value)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser, TimeStampedModel):
    """Marketplace account; ``role`` gates the admin back office."""

    name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=30, blank=True)
    role = models.CharField(max_length=20, choices=UserRole.choices(), default=UserRole.USER.value)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    objects = MarketplaceUserManager()

    class Meta(TimeStampedModel.Meta):
        db_table = "users"

    def __str__(self) -> str:
        return self.name or self.email

    @property
    def user_role(self) -> UserRole:
        return UserRole(self.role)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def save(self, *args, **kwargs):
        if not self.name:
            self.name = self.get_full_name() or self.username
        super().save(*args, **kwargs)
