from django.urls import path

from .views import ProjectListCreateView, ProjectDetailView, ProjectTransitionView

urlpatterns = [
    path("", ProjectListCreateView.as_view(), name="project-list"),
    path("<uuid:pk>/", ProjectDetailView.as_view(), name="project-detail"),
    path("<uuid:pk>/<str:action>/", ProjectTransitionView.as_view(), name="project-transition"),
]
