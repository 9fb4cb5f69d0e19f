from django.contrib import admin

from .models import Shop, ShopMembership


class ShopMembershipInline(admin.TabularInline):
    model = ShopMembership
    extra = 1
    autocomplete_fields = ("user",)


@admin.register(Shop)
class ShopAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug", "default_language", "created_at")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
    inlines = [ShopMembershipInline]


@admin.register(ShopMembership)
class ShopMembershipAdmin(admin.ModelAdmin):
    list_display = ("shop", "user", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("shop__name", "user__username", "user__email")
