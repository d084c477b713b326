# storefront/services/payments/events.py
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class PaymentEvent:
    """A gateway notification reduced to what the order needs."""

    provider: str
    order_id: Optional[str] = None
    external_order_ref: Optional[str] = None
    status: Optional[str] = None
    shipping: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CheckoutLine:
    name: str
    quantity: int
    unit_price_cents: int


@dataclass(frozen=True)
class CheckoutRequest:
    order_id: str
    amount_cents: int
    items: List[CheckoutLine]
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    return_url: Optional[str] = None


@dataclass(frozen=True)
class CheckoutSession:
    payment_link: Optional[str]
    gateway_order_id: Optional[str]


@dataclass(frozen=True)
class PaymentIntentHandle:
    id: str
    client_secret: Optional[str]


class PaymentProviderAdapter(ABC):
    """Turns one provider's raw webhook request into a PaymentEvent."""

    provider: str = ""

    @abstractmethod
    def parse(self, body: bytes, headers: Mapping[str, str],
              query: Mapping[str, str]) -> PaymentEvent | None:
        """None means the event is acknowledged but does not target an order."""


def dig(obj: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(obj, Mapping):
            return None
        obj = obj.get(key)
    return obj
