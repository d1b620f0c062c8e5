from rest_framework import permissions


class CanManageOrder(permissions.BasePermission):
    """
    Permission: Only the order creator (or staff) can edit or delete an order.
    Any authenticated user can read orders.
    """

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True

        return obj.created_by_id == request.user.id or request.user.is_staff
