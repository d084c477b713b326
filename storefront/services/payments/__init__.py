from storefront.services.payments.events import PaymentEvent, PaymentProviderAdapter
from storefront.services.payments.pagarme import PagarmeGateway, PagarmeWebhookAdapter
from storefront.services.payments.stripe_gateway import StripeGateway, StripeWebhookAdapter
from storefront.services.payments.reconciler import OrderStatusReconciler

__all__ = [
    "PaymentEvent",
    "PaymentProviderAdapter",
    "PagarmeGateway",
    "PagarmeWebhookAdapter",
    "StripeGateway",
    "StripeWebhookAdapter",
    "OrderStatusReconciler",
]
