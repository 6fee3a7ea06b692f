"""Core app configuration."""

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the core application."""

    name = "jewelstore.core"
    verbose_name = "Jewelstore Core"
    default_auto_field = "django.db.models.BigAutoField"
