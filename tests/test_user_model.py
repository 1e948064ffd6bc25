"""
Tests for the back-office user model.
"""

import pytest

from apps.core.models import User


@pytest.mark.django_db
class TestUser:
    """Test the fields and helpers the label subsystem relies on."""

    def test_display_name_prefers_full_name(self, user):
        assert user.display_name == "Asha Rao"

    def test_display_name_falls_back_to_username(self, other_user):
        assert other_user.display_name == "other"

    def test_default_role(self, other_user):
        assert other_user.role == User.VIEWER

    def test_only_label_helpers_exposed(self):
        """Permission policy lives outside the user model."""
        assert not hasattr(User, "is_admin")
        assert not hasattr(User, "can_manage_inventory")
