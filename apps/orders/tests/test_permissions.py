import pytest
from rest_framework.test import APIRequestFactory
from apps.orders.permissions import CanManageOrder


# =============================================================================
# CanManageOrder Tests
# =============================================================================

@pytest.mark.django_db
class TestCanManageOrder:
    """Tests for CanManageOrder permission class."""

    def test_anyone_can_read(self, other_user, small_order):
        """Any authenticated user can view an order."""
        factory = APIRequestFactory()
        request = factory.get('/')
        request.user = other_user

        permission = CanManageOrder()
        assert permission.has_object_permission(request, None, small_order) is True

    def test_creator_can_edit(self, requester, small_order):
        """Order creator can edit their own order."""
        factory = APIRequestFactory()
        request = factory.patch('/')
        request.user = requester

        permission = CanManageOrder()
        assert permission.has_object_permission(request, None, small_order) is True

    def test_other_user_cannot_edit(self, other_user, small_order):
        """Non-creator cannot edit someone else's order."""
        factory = APIRequestFactory()
        request = factory.patch('/')
        request.user = other_user

        permission = CanManageOrder()
        assert permission.has_object_permission(request, None, small_order) is False

    def test_approver_cannot_delete(self, admin_level_1, small_order):
        """Approval authority does not grant edit rights."""
        factory = APIRequestFactory()
        request = factory.delete('/')
        request.user = admin_level_1

        permission = CanManageOrder()
        assert permission.has_object_permission(request, None, small_order) is False

    def test_staff_can_delete(self, staff_user, small_order):
        """Staff can manage any order."""
        factory = APIRequestFactory()
        request = factory.delete('/')
        request.user = staff_user

        permission = CanManageOrder()
        assert permission.has_object_permission(request, None, small_order) is True
