# storefront/services/payments/reconciler.py
from typing import Any, Dict

from sqlalchemy.orm import Session

from storefront.repos.order_repo import OrderRepo
from storefront.services.payments.events import PaymentEvent
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderStatusReconciler:
    """
    Applies a PaymentEvent to its order as a single UPDATE.
    The same event applied twice writes the same values, so redelivery is safe.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)

    @staticmethod
    def build_patch(event: PaymentEvent) -> Dict[str, Any]:
        patch: Dict[str, Any] = {"gateway_provider": event.provider}
        if event.status:
            patch["status"] = event.status
        if event.external_order_ref:
            patch["gateway_order_id"] = event.external_order_ref
        patch.update(event.shipping)
        return patch

    def apply(self, event: PaymentEvent | None) -> int:
        if event is None:
            return 0
        patch = self.build_patch(event)

        if event.order_id:
            rows = self.repo.update_by_id(event.order_id, patch)
            target = f"order {event.order_id}"
        elif event.external_order_ref:
            rows = self.repo.update_by_gateway_id(event.external_order_ref, patch)
            target = f"gateway order {event.external_order_ref}"
        else:
            return 0

        if rows:
            logger.info(f"{event.provider} webhook patched {target}: status={event.status}")
        else:
            logger.warning(f"{event.provider} webhook matched no order for {target}")
        return rows
