from __future__ import annotations

from django.urls import path
from . import views


app_name = "layout"

urlpatterns = [
    path("api/layout", views.layout_state, name="layout_state"),
    path("api/layout/ping", views.ping, name="ping"),
]
