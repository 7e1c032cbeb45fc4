"""Dashboard URL configuration."""
from __future__ import annotations

from django.urls import path

from weatherboard.dashboard.views import dashboard

urlpatterns = [
    path("", dashboard, name="dashboard"),
]
