"""URL configuration for the formatting host bridge."""

from __future__ import annotations

from django.urls import path

from formatting import views

app_name = "formatting"

urlpatterns = [
    path("model/", views.formatting_model, name="model"),
]
