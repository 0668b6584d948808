import uuid
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.authtoken.models import Token
from rest_framework.test import APIClient

from catalog.models import Category, Website
from core.enums import UserRole, WebsiteStatus, WebsiteType

User = get_user_model()

PASSWORD = "Str0ng-Passw0rd!"


@pytest.fixture()
def password():
    return PASSWORD


@pytest.fixture()
def api_client():
    return APIClient()


@pytest.fixture()
def user_factory():
    def _create(**overrides):
        suffix = uuid.uuid4().hex[:6]
        email = overrides.pop("email", f"user-{suffix}@example.com")
        defaults = {
            "username": email,
            "email": email,
            "name": f"User {suffix}",
            "role": UserRole.USER.value,
        }
        defaults.update(overrides)
        password = defaults.pop("password", PASSWORD)
        return User.objects.create_user(password=password, **defaults)

    return _create


@pytest.fixture()
def admin_user(user_factory):
    return user_factory(name="Admin", role=UserRole.ADMIN.value)


@pytest.fixture()
def buyer(user_factory):
    return user_factory(name="Buyer")


@pytest.fixture()
def client_for():
    """APIClient authenticated with the bearer token of ``user``."""

    def _client(user):
        token, _ = Token.objects.get_or_create(user=user)
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.key}")
        return client

    return _client


@pytest.fixture()
def admin_client(client_for, admin_user):
    return client_for(admin_user)


@pytest.fixture()
def buyer_client(client_for, buyer):
    return client_for(buyer)


@pytest.fixture()
def category_factory():
    def _create(**overrides):
        suffix = uuid.uuid4().hex[:6]
        defaults = {"name": f"Category {suffix}"}
        defaults.update(overrides)
        return Category.objects.create(**defaults)

    return _create


@pytest.fixture()
def category(category_factory):
    return category_factory(name="Shops")


@pytest.fixture()
def website_factory(admin_user, category):
    def _create(**overrides):
        suffix = uuid.uuid4().hex[:6]
        defaults = {
            "name": f"Website {suffix}",
            "description": "A ready to launch website.",
            "demo_url": f"https://demo.example.com/{suffix}",
            "price": Decimal("100.00"),
            "type": WebsiteType.ECOMMERCE.value,
            "status": WebsiteStatus.AVAILABLE.value,
            "technologies": ["Django"],
            "features": ["Blog"],
            "category": category,
            "created_by": admin_user,
            "main_image": {"url": f"/media/{suffix}.png", "storage_id": f"{suffix}.png"},
            "gallery": [{"url": f"/media/{suffix}.png", "storage_id": f"{suffix}.png"}],
        }
        defaults.update(overrides)
        return Website.objects.create(**defaults)

    return _create


@pytest.fixture()
def image_factory():
    def _create(name="screenshot.png"):
        return SimpleUploadedFile(name, b"\x89PNG\r\n\x1a\nfake-image", content_type="image/png")

    return _create
