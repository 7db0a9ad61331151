from rest_framework import serializers
from .models import Transaction, TransactionStatus
from .services.transaction_management import TRANSACTION_KINDS
from apps.accounts.serializers import UserPublicSerializer


class TransactionSerializer(serializers.ModelSerializer):
    """Transaction as seen by its buyer, seller or staff."""

    project_title = serializers.CharField(source='project.title', read_only=True)
    buyer = UserPublicSerializer(read_only=True)
    seller = UserPublicSerializer(read_only=True)

    class Meta:
        model = Transaction
        fields = [
            'id',
            'project',
            'project_title',
            'buyer',
            'seller',
            'amount',
            'status',
            'external_order_id',
            'external_transaction_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CreatePurchaseSerializer(serializers.Serializer):
    """Input for starting a purchase."""

    project_id = serializers.UUIDField()


class PurchaseSessionSerializer(serializers.Serializer):
    """Snap checkout session returned to the buyer."""

    token = serializers.CharField()
    redirect_url = serializers.CharField()
    transaction_id = serializers.UUIDField()


class TransactionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the user's transaction list.

    Query Parameters:
        type (str): 'purchases', 'sales' or 'all'
    """

    type = serializers.ChoiceField(
        choices=TRANSACTION_KINDS,
        required=False,
        default='all',
    )


class AdminTransactionFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for the staff transaction list.

    Query Parameters:
        status (str): Filter by transaction status
    """

    status = serializers.ChoiceField(
        choices=TransactionStatus.choices,
        required=False,
    )


class GatewayNotificationSerializer(serializers.Serializer):
    """
    Midtrans HTTP notification body.

    Only the fields the state machine needs are validated; the gateway
    sends many more, which are ignored.
    Signed fields are kept verbatim.
    """

    order_id = serializers.CharField(trim_whitespace=False)
    status_code = serializers.CharField(trim_whitespace=False)
    gross_amount = serializers.CharField(trim_whitespace=False)
    signature_key = serializers.CharField(trim_whitespace=False)
    transaction_status = serializers.CharField()
    fraud_status = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')
    transaction_id = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')


class CallbackResponseSerializer(serializers.Serializer):
    status = serializers.CharField()
    transaction_status = serializers.CharField()


class PurchaseCheckSerializer(serializers.Serializer):
    purchased = serializers.BooleanField()
