# backend/navigation/admin.py
from django.contrib import admin

from .models import NavigationItem, NavigationTree, NavigationTreeItemReference


@admin.register(NavigationItem)
class NavigationItemAdmin(admin.ModelAdmin):
    list_display = ("id", "__str__", "shop", "has_unpublished_changes", "created_at")
    list_filter = ("shop", "has_unpublished_changes")
    readonly_fields = ("published_data", "has_unpublished_changes", "created_at", "updated_at")
    ordering = ("shop", "created_at")

    def get_readonly_fields(self, request, obj=None):
        fields = super().get_readonly_fields(request, obj)
        if obj is not None:
            # trees reference items within one shop only
            fields = ("shop", *fields)
        return fields


class NavigationTreeItemReferenceInline(admin.TabularInline):
    model = NavigationTreeItemReference
    extra = 0
    can_delete = False
    readonly_fields = ("navigation_item", "is_draft")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(NavigationTree)
class NavigationTreeAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "shop", "updated_at")
    list_filter = ("shop",)
    search_fields = ("name",)
    # structure goes through the API so references and publishing stay consistent
    readonly_fields = ("items", "draft_items", "created_at", "updated_at")
    inlines = [NavigationTreeItemReferenceInline]

    def get_readonly_fields(self, request, obj=None):
        fields = super().get_readonly_fields(request, obj)
        if obj is not None:
            fields = ("shop", *fields)
        return fields
