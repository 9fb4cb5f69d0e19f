"""Shared test fixtures."""

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from navigation import services
from shops.models import Shop, ShopMembership, ShopRole


def item_data(label, language="en", **extra):
    return {"content": [{"language": language, "value": label}], **extra}


@pytest.fixture
def shop(db) -> Shop:
    return Shop.objects.create(name="Acme", slug="acme", default_language="en")


@pytest.fixture
def other_shop(db) -> Shop:
    return Shop.objects.create(name="Globex", slug="globex", default_language="de")


def _member(shop, username, role):
    user = get_user_model().objects.create_user(
        username=username, email=f"{username}@example.com", password="pass12345"
    )
    ShopMembership.objects.create(shop=shop, user=user, role=role)
    return user


@pytest.fixture
def editor(shop):
    return _member(shop, "editor", ShopRole.EDITOR)


@pytest.fixture
def viewer(shop):
    return _member(shop, "viewer", ShopRole.VIEWER)


@pytest.fixture
def outsider(other_shop):
    return _member(other_shop, "outsider", ShopRole.OWNER)


@pytest.fixture
def api_client(editor) -> APIClient:
    client = APIClient()
    client.force_authenticate(editor)
    return client


@pytest.fixture
def make_item(shop):
    """Create a navigation item with a single content entry."""

    def _make(label="Home", language="en", target_shop=None, metadata=None, **extra):
        return services.create_navigation_item(
            target_shop or shop, item_data(label, language, **extra), metadata
        )

    return _make
