"""
Core models for the gemstone back-office.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Back-office user with a single role.

    Users own label print jobs and label cart entries. Print jobs outlive
    their owner (see ``apps.labels.models.PrintJob``).
    """

    # Role choices
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    SALES = "SALES"
    ACCOUNTS = "ACCOUNTS"
    VIEWER = "VIEWER"

    ROLE_CHOICES = [
        (SUPER_ADMIN, "Super Administrator"),
        (ADMIN, "Administrator"),
        (SALES, "Sales"),
        (ACCOUNTS, "Accounts"),
        (VIEWER, "Viewer"),
    ]

    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=VIEWER,
        help_text="User's role in the system",
    )

    phone = models.CharField(
        max_length=20,
        blank=True,
        help_text="User's phone number",
    )

    class Meta:
        db_table = "users"
        ordering = ["username"]
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=["role"], name="user_role_idx"),
        ]

    def __str__(self):
        return f"{self.username} ({self.get_role_display()})"

    @property
    def display_name(self):
        """Full name when set, otherwise the username."""
        return self.get_full_name() or self.username
