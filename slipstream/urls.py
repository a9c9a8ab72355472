"""
URL configuration for the slipstream project.

The layout API is mounted at the site root so the client agent can reach it at
``/api/layout``; page routes of the generated application are added alongside.
"""
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include("apps.layout.urls")),
]
