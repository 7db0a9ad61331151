# ==========================================
# apps/transactions/admin.py
# ==========================================

from django.contrib import admin
from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ['external_order_id', 'project', 'buyer', 'seller', 'amount', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['external_order_id', 'external_transaction_id', 'buyer__email', 'seller__email', 'project__title']
    # Status only changes through gateway notifications
    readonly_fields = [
        'id', 'project', 'buyer', 'seller', 'amount', 'status',
        'external_order_id', 'external_transaction_id', 'created_at', 'updated_at',
    ]
    date_hierarchy = 'created_at'

    def has_add_permission(self, request):
        return False
