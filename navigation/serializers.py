# backend/navigation/serializers.py
from rest_framework import serializers

from .models import NavigationItem, NavigationTree
from .translations import resolve


class ContentEntrySerializer(serializers.Serializer):
    language = serializers.CharField(max_length=10)
    value = serializers.CharField(allow_blank=True)


class NavigationItemDataSerializer(serializers.Serializer):
    content = ContentEntrySerializer(many=True)
    classNames = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    url = serializers.CharField(required=False, allow_blank=True, allow_null=True, default=None)
    isUrlRelative = serializers.BooleanField(required=False, default=True)
    shouldOpenInNewWindow = serializers.BooleanField(required=False, default=False)

    def validate_content(self, value):
        languages = [entry["language"] for entry in value]
        if len(languages) != len(set(languages)):
            raise serializers.ValidationError("Each content language may only appear once.")
        return value


class NavigationItemCreateSerializer(serializers.Serializer):
    draftData = NavigationItemDataSerializer()
    metadata = serializers.DictField(required=False, default=dict)


class NavigationItemUpdateSerializer(serializers.Serializer):
    draftData = NavigationItemDataSerializer(required=False)
    metadata = serializers.DictField(required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide draftData and/or metadata.")
        return attrs


class NavigationItemSerializer(serializers.ModelSerializer):
    shopId = serializers.IntegerField(source="shop_id", read_only=True)
    data = serializers.SerializerMethodField()
    draftData = serializers.SerializerMethodField()
    hasUnpublishedChanges = serializers.BooleanField(source="has_unpublished_changes", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = NavigationItem
        fields = [
            "id",
            "shopId",
            "data",
            "draftData",
            "metadata",
            "hasUnpublishedChanges",
            "createdAt",
        ]

    def _localized(self, data):
        if data is None:
            return None
        out = data.to_dict()
        language = self.context.get("language")
        if language:
            out["contentForLanguage"] = resolve(data.content, language)
        return out

    def get_data(self, obj):
        return self._localized(obj.published)

    def get_draftData(self, obj):
        return self._localized(obj.draft)


class NavigationTreeCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    # node shape (and cycles) are checked when the forest is parsed
    draftItems = serializers.ListField(child=serializers.JSONField(), required=False, default=list)


class NavigationTreeUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    draftItems = serializers.ListField(child=serializers.JSONField(), required=False)

    def validate(self, attrs):
        if not attrs:
            raise serializers.ValidationError("Provide name and/or draftItems.")
        return attrs


class NavigationTreeSerializer(serializers.ModelSerializer):
    """Raw tree record, structure as stored (item ids only)."""

    shopId = serializers.IntegerField(source="shop_id", read_only=True)
    draftItems = serializers.JSONField(source="draft_items", read_only=True)
    hasUnpublishedChanges = serializers.BooleanField(source="has_unpublished_changes", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = NavigationTree
        fields = [
            "id",
            "shopId",
            "name",
            "items",
            "draftItems",
            "hasUnpublishedChanges",
            "createdAt",
            "updatedAt",
        ]


class AssembledTreeItemSerializer(serializers.Serializer):
    navigationItem = serializers.SerializerMethodField()
    expanded = serializers.BooleanField(source="node.expanded")
    isVisible = serializers.BooleanField(source="node.is_visible")
    isPrivate = serializers.BooleanField(source="node.is_private")
    isSecondary = serializers.BooleanField(source="node.is_secondary")
    items = serializers.SerializerMethodField()

    def get_navigationItem(self, obj):
        data = NavigationItemSerializer(obj.navigation_item).data
        if data["draftData"] is not None:
            data["draftData"]["contentForLanguage"] = obj.content_for_language
        if data["data"] is not None:
            data["data"]["contentForLanguage"] = obj.published_content_for_language
        return data

    def get_items(self, obj):
        return AssembledTreeItemSerializer(obj.items, many=True, context=self.context).data


class AssembledTreeSerializer(serializers.Serializer):
    id = serializers.IntegerField(source="tree.pk")
    shopId = serializers.IntegerField(source="tree.shop_id")
    name = serializers.CharField(source="tree.name")
    language = serializers.CharField()
    hasUnpublishedChanges = serializers.BooleanField(source="has_unpublished_changes")
    items = AssembledTreeItemSerializer(many=True)
    draftItems = AssembledTreeItemSerializer(source="draft_items", many=True)


def serialize_page(page, context=None):
    return {
        "nodes": NavigationItemSerializer(page.nodes, many=True, context=context or {}).data,
        "totalCount": page.total_count,
        "pageInfo": {
            "hasNextPage": page.page_info.has_next_page,
            "hasPreviousPage": page.page_info.has_previous_page,
            "startCursor": page.page_info.start_cursor,
            "endCursor": page.page_info.end_cursor,
        },
    }
