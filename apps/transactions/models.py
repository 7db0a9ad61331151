# ==========================================
# apps/transactions/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class TransactionStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    SUCCESS = 'success', 'Success'
    FAILED = 'failed', 'Failed'


class Transaction(models.Model):
    """
    Purchase of a paid project through the payment gateway.

    Created ``pending``; moves to ``success`` or ``failed`` only through
    gateway notifications. At most one ``success`` row per (project, buyer).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey('projects.Project', on_delete=models.PROTECT, related_name='transactions')
    buyer = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='purchases')
    seller = models.ForeignKey('accounts.User', on_delete=models.PROTECT, related_name='sales')
    # Minor currency units, copied from the project price at purchase time
    amount = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    status = models.CharField(max_length=20, choices=TransactionStatus.choices, default=TransactionStatus.PENDING)
    # Not unique: retries of the same purchase may reuse an order id
    external_order_id = models.CharField(max_length=255, db_index=True)
    external_transaction_id = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'transactions'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['project', 'buyer'],
                condition=models.Q(status='success'),
                name='unique_successful_purchase',
            ),
        ]
        indexes = [
            models.Index(fields=['buyer', 'created_at'], name='transactions_buyer_idx'),
            models.Index(fields=['seller', 'created_at'], name='transactions_seller_idx'),
            models.Index(fields=['status'], name='transactions_status_idx'),
        ]

    def __str__(self):
        return f"{self.external_order_id} ({self.status})"

    @property
    def is_terminal(self):
        return self.status != TransactionStatus.PENDING
