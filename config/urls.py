# backend/config/urls.py
from django.contrib import admin
from django.http import HttpResponse
from django.urls import include, path

urlpatterns = [
    path("", lambda r: HttpResponse("API is running")),
    path("admin/", admin.site.urls),

    path(
        "api/shops/<int:shop_id>/navigation/",
        include("navigation.urls", namespace="navigation"),
    ),
]
