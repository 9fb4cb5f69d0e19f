# backend/navigation/urls.py
from django.urls import path

from .views import (
    NavigationItemDetailView,
    NavigationItemListView,
    NavigationTreeDetailView,
    NavigationTreeListView,
    PublishNavigationTreeView,
)

app_name = "navigation"

urlpatterns = [
    path("items/", NavigationItemListView.as_view(), name="item_list"),
    path("items/<int:item_id>/", NavigationItemDetailView.as_view(), name="item_detail"),
    path("trees/", NavigationTreeListView.as_view(), name="tree_list"),
    path("trees/<int:tree_id>/", NavigationTreeDetailView.as_view(), name="tree_detail"),
    path(
        "trees/<int:tree_id>/publish/",
        PublishNavigationTreeView.as_view(),
        name="tree_publish",
    ),
]
