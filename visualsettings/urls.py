"""URL configuration for visualsettings."""

from __future__ import annotations

from django.urls import include, path

urlpatterns = [
    path("formatting/", include("formatting.urls")),
]
