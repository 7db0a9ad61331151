from rest_framework import permissions


class IsProjectOwnerOrReadOnly(permissions.BasePermission):
    """
    Permission: Only the project owner can edit/delete their project.
    Anyone can read projects.
    """

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True

        return obj.user_id == request.user.id


class IsStaffOrReadOnly(permissions.BasePermission):
    """Permission: Anyone can read, only staff can write."""

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True

        return bool(request.user and request.user.is_staff)
