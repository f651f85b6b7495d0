"""
Role-based permission classes shared by every app.

Roles:
- admin: everything, including user management and system settings
- operator: day-to-day records (farmers, deliveries, payments, reports)
- farmer: read-only access to their own records
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


class IsAdminRole(BasePermission):
    """Permission: user must have the admin role."""

    message = 'Only administrators can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_admin)


class IsStaffRole(BasePermission):
    """Permission: user must be an operator or an admin."""

    message = 'Only operators and administrators can perform this action.'

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.is_operator_or_admin)


class IsStaffOrFarmerReadOnly(BasePermission):
    """
    Staff get full access; farmers may only read.

    Which records a farmer may read is narrowed by the view's queryset.
    """

    message = 'Farmers have read-only access to their own records.'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if user.is_operator_or_admin:
            return True
        return user.is_farmer and request.method in SAFE_METHODS
