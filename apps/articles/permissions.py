from rest_framework import permissions


class IsArticleAuthorOrReadOnly(permissions.BasePermission):
    """
    Permission: Only the author (or staff) can edit/delete an article.
    Anyone can read articles.
    """

    def has_object_permission(self, request, view, obj):
        if request.method in permissions.SAFE_METHODS:
            return True

        return obj.user_id == request.user.id or request.user.is_staff
