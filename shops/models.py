# backend/shops/models.py
from django.conf import settings
from django.db import models


# 1) Shop roles enum

class ShopRole(models.TextChoices):
    VIEWER = "viewer", "Viewer"
    EDITOR = "editor", "Navigation Editor"
    OWNER = "owner", "Shop Owner"


SHOP_ROLE_ORDER = [
    ShopRole.VIEWER,
    ShopRole.EDITOR,
    ShopRole.OWNER,
]


def has_min_role(user_role: str | None, required: str | None) -> bool:
    """
    If required is None => any member.
    Else check if user_role rank >= required rank.
    Non-members have user_role = None.
    """
    if not user_role:
        return False  # not a member

    if not required:
        return True

    try:
        user_idx = SHOP_ROLE_ORDER.index(user_role)
        req_idx = SHOP_ROLE_ORDER.index(required)
    except ValueError:
        return False

    return user_idx >= req_idx


class Shop(models.Model):
    """A storefront tenant. Every navigation item and tree belongs to one."""

    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=140, unique=True)
    default_language = models.CharField(
        max_length=10,
        default="en",
        help_text="Language code used when a request does not ask for one.",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return self.name

    def role_for(self, user) -> str | None:
        if user is None or not user.is_authenticated:
            return None
        if user.is_staff or user.is_superuser:
            return ShopRole.OWNER
        membership = self.memberships.filter(user=user).only("role").first()
        return membership.role if membership else None


class ShopMembership(models.Model):
    shop = models.ForeignKey(
        Shop, related_name="memberships", on_delete=models.CASCADE
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="shop_memberships",
        on_delete=models.CASCADE,
    )
    role = models.CharField(
        max_length=32,
        choices=ShopRole.choices,
        default=ShopRole.VIEWER,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ("shop", "user")
        ordering = ["shop", "user"]

    def __str__(self) -> str:
        return f"{self.user} @ {self.shop} ({self.role})"
