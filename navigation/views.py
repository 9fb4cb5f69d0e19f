# backend/navigation/views.py
from rest_framework import status
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from shops.permissions import HasShopRole, get_request_shop

from . import queries, services
from .exceptions import NotFound
from .models import NavigationItem, NavigationTree
from .pagination import SORT_ASC, SORT_BY_CREATED_AT
from .serializers import (
    AssembledTreeSerializer,
    NavigationItemCreateSerializer,
    NavigationItemSerializer,
    NavigationItemUpdateSerializer,
    NavigationTreeCreateSerializer,
    NavigationTreeSerializer,
    NavigationTreeUpdateSerializer,
    serialize_page,
)

EditorOrAbove = HasShopRole.with_role("editor")


def _int_param(request, name):
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError({name: "Must be an integer."})


def _bool_param(request, name, default):
    raw = request.query_params.get(name)
    if raw is None:
        return default
    return raw.lower() in ("1", "true", "yes")


class ShopScopedAPIView(APIView):
    """
    Base view for /api/shops/<shop_id>/navigation/...

    Reads need a viewer membership of the shop, writes an editor one.
    """

    permission_classes = [IsAuthenticated, HasShopRole]

    def get_shop(self):
        return get_request_shop(self.request, self)


class NavigationItemListView(ShopScopedAPIView):
    """
    GET  /api/shops/<shop_id>/navigation/items/?first=20&after=<cursor>&sortBy=createdAt&sortOrder=desc
    POST /api/shops/<shop_id>/navigation/items/
    """

    def get(self, request, shop_id):
        page = queries.navigation_items_by_shop_id(
            self.get_shop(),
            first=_int_param(request, "first"),
            last=_int_param(request, "last"),
            after=request.query_params.get("after") or None,
            before=request.query_params.get("before") or None,
            sort_by=request.query_params.get("sortBy", SORT_BY_CREATED_AT),
            sort_order=request.query_params.get("sortOrder", SORT_ASC),
        )
        return Response(serialize_page(page, {"request": request}))

    def post(self, request, shop_id):
        serializer = NavigationItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = services.create_navigation_item(
            self.get_shop(),
            serializer.validated_data["draftData"],
            serializer.validated_data.get("metadata"),
        )
        return Response(NavigationItemSerializer(item).data, status=status.HTTP_201_CREATED)


class NavigationItemDetailView(ShopScopedAPIView):
    def get(self, request, shop_id, item_id):
        item = NavigationItem.objects.get_item(self.get_shop(), item_id)
        if item is None:
            raise NotFound(f"Navigation item {item_id} not found.")
        language = request.query_params.get("language")
        return Response(NavigationItemSerializer(item, context={"language": language}).data)

    def patch(self, request, shop_id, item_id):
        serializer = NavigationItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = services.update_navigation_item(
            self.get_shop(),
            item_id,
            draft_data=serializer.validated_data.get("draftData"),
            metadata=serializer.validated_data.get("metadata"),
        )
        return Response(NavigationItemSerializer(item).data)

    def delete(self, request, shop_id, item_id):
        item = services.delete_navigation_item(self.get_shop(), item_id)
        return Response(NavigationItemSerializer(item).data)


class NavigationTreeListView(ShopScopedAPIView):
    def get(self, request, shop_id):
        trees = NavigationTree.objects.list_by_shop(self.get_shop())
        return Response(NavigationTreeSerializer(trees, many=True).data)

    def post(self, request, shop_id):
        serializer = NavigationTreeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tree = services.create_navigation_tree(
            self.get_shop(),
            serializer.validated_data["name"],
            serializer.validated_data.get("draftItems"),
        )
        return Response(NavigationTreeSerializer(tree).data, status=status.HTTP_201_CREATED)


class NavigationTreeDetailView(ShopScopedAPIView):
    """
    GET   /api/shops/<shop_id>/navigation/trees/<tree_id>/?language=en&shouldIncludeSecondary=false
    PATCH /api/shops/<shop_id>/navigation/trees/<tree_id>/
    """

    def get(self, request, shop_id, tree_id):
        shop = self.get_shop()
        language = request.query_params.get("language") or shop.default_language

        assembled = queries.navigation_tree_by_id(
            shop,
            tree_id,
            language,
            should_include_secondary=_bool_param(request, "shouldIncludeSecondary", True),
        )
        if assembled is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        return Response(AssembledTreeSerializer(assembled).data)

    def patch(self, request, shop_id, tree_id):
        serializer = NavigationTreeUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        tree = services.update_navigation_tree(
            self.get_shop(),
            tree_id,
            name=serializer.validated_data.get("name"),
            draft_items=serializer.validated_data.get("draftItems"),
        )
        return Response(NavigationTreeSerializer(tree).data)


class PublishNavigationTreeView(ShopScopedAPIView):
    permission_classes = [IsAuthenticated, EditorOrAbove]

    def post(self, request, shop_id, tree_id):
        tree = services.publish_navigation_changes(self.get_shop(), tree_id)
        return Response(NavigationTreeSerializer(tree).data)
