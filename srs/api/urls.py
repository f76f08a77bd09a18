from django.urls import path

from .views import BulkItemsView, DueItemsView, ItemMediaView, ItemView, ReviewView, StatsView

urlpatterns = [
    path("items", ItemView.as_view(), name="srs-items"),
    path("items/bulk", BulkItemsView.as_view(), name="srs-items-bulk"),
    path("items/<int:item_id>/media", ItemMediaView.as_view(), name="srs-item-media"),
    path("reviews", ReviewView.as_view(), name="srs-reviews"),
    path("due-items", DueItemsView.as_view(), name="srs-due-items"),
    path("stats", StatsView.as_view(), name="srs-stats"),
]
