# backend/shops/permissions.py
from django.shortcuts import get_object_or_404
from rest_framework.permissions import SAFE_METHODS, BasePermission

from .models import Shop, ShopRole, has_min_role


def get_request_shop(request, view) -> Shop:
    """
    Resolve (and cache on the request) the shop named by the `shop_id` URL kwarg.
    """
    shop = getattr(request, "shop", None)
    if shop is None:
        shop = get_object_or_404(Shop, pk=view.kwargs["shop_id"])
        request.shop = shop
    return shop


class HasShopRole(BasePermission):
    """
    Usage:
        permission_classes = [HasShopRole.with_role("editor")]

    Without a fixed role, safe methods need `viewer` and writes need `editor`.
    """
    required_role = None
    message = "You do not have access to this shop."

    def has_permission(self, request, view):
        shop = get_request_shop(request, view)
        required = self.required_role
        if required is None:
            required = ShopRole.VIEWER if request.method in SAFE_METHODS else ShopRole.EDITOR
        return has_min_role(shop.role_for(request.user), required)

    @classmethod
    def with_role(cls, role: str):
        class _Perm(cls):
            required_role = role
        return _Perm
