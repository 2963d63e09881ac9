from django.urls import path
from .views import ActivityFeedView


urlpatterns = [
    path("activity/", ActivityFeedView.as_view(), name="activity-feed"),
]
