# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from apps.gamification.leveling import level_for_exp
from .models import User, UserStatus


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for campus users.

    total_exp stays editable so staff can correct a ledger by hand.
    """

    list_display = [
        'email',
        'name',
        'university',
        'role',
        'status_badge',
        'total_exp',
        'level',
        'created_at',
    ]

    list_filter = [
        'role',
        'status',
        'is_staff',
        'created_at',
    ]

    search_fields = [
        'email',
        'name',
        'university',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'name', 'password')
        }),
        ('Profile', {
            'fields': ('avatar_url', 'university', 'major', 'bio', 'phone'),
        }),
        ('Gamification', {
            'fields': ('total_exp',),
        }),
        ('Moderation', {
            'fields': ('role', 'status'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'updated_at', 'last_login']

    filter_horizontal = ['groups', 'user_permissions']

    actions = ['block_users', 'unblock_users']

    def status_badge(self, obj):
        if obj.is_blocked:
            return format_html(
                '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Blocked</span>'
            )
        return format_html(
            '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Active</span>'
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'

    def level(self, obj):
        return level_for_exp(obj.total_exp)
    level.admin_order_field = 'total_exp'

    @admin.action(description='Block selected users')
    def block_users(self, request, queryset):
        """Block selected users (superusers are skipped)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(status=UserStatus.BLOCKED)
        skipped = queryset.count() - count
        msg = f'Blocked {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    @admin.action(description='Unblock selected users')
    def unblock_users(self, request, queryset):
        count = queryset.update(status=UserStatus.ACTIVE)
        self.message_user(request, f'Unblocked {count} user(s).')
