from django.contrib import admin
from django.urls import path, include
from core.views import HealthCheckView

urlpatterns = [
    # /admin/ belongs to the portal's admin pages (see RoleRouteSessionMiddleware)
    path('django-admin/', admin.site.urls),
    path('api/users/', include('users.urls')),
    path('api/auth/', include('authx.urls')),
    path('api/core/', include('core.urls')),
    path('api/projects/', include('projects.urls')),
    path('api/ux/', include('ux.urls')),
    path("api/health/", HealthCheckView.as_view(), name="health-check"),
]
