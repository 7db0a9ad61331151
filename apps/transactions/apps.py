from django.apps import AppConfig
from django.conf import settings


class TransactionsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.transactions'
    label = 'transactions'
    verbose_name = 'Transactions'

    # Built once at startup, handed to the gateway client and webhook handler
    gateway_config = None

    def ready(self):
        from .services.payment_gateway import PaymentGatewayConfig

        self.gateway_config = PaymentGatewayConfig.from_settings(settings)
