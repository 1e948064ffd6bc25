"""
URL configuration for inventory app.
"""

from django.urls import path

from . import views

app_name = "inventory"

urlpatterns = [
    path(
        "api/inventory/items/",
        views.InventoryItemListCreateView.as_view(),
        name="item_list",
    ),
    path(
        "api/inventory/items/<uuid:id>/",
        views.InventoryItemDetailView.as_view(),
        name="item_detail",
    ),
    path(
        "api/inventory/codes/",
        views.MasterCodeListView.as_view(),
        name="code_list",
    ),
]
