"""
Labels app configuration.
"""

from django.apps import AppConfig


class LabelsConfig(AppConfig):
    """Configuration for the label printing app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.labels"
    verbose_name = "Label Printing"
