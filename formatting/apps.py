"""App configuration for the formatting Django app."""

from __future__ import annotations

from django.apps import AppConfig


class FormattingConfig(AppConfig):
    """Configuration for the `formatting` app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "formatting"
