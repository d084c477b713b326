# storefront/api/routers/webhooks.py
from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_pagarme_webhook_adapter, get_stripe_webhook_adapter
from storefront.services.payments.events import PaymentProviderAdapter
from storefront.services.payments.pagarme import PagarmeWebhookAdapter
from storefront.services.payments.reconciler import OrderStatusReconciler
from storefront.services.payments.stripe_gateway import StripeWebhookAdapter

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


def _reconcile(adapter: PaymentProviderAdapter, db: Session, body: bytes, request: Request) -> int:
    event = adapter.parse(body, request.headers, request.query_params)
    return OrderStatusReconciler(db).apply(event)


@router.post("/pagarme")
async def pagarme_webhook(
    request: Request,
    db: Session = Depends(get_db),
    adapter: PagarmeWebhookAdapter = Depends(get_pagarme_webhook_adapter),
):
    body = await request.body()
    await run_in_threadpool(_reconcile, adapter, db, body, request)
    return {"ok": True}


@router.post("/stripe")
async def stripe_webhook(
    request: Request,
    db: Session = Depends(get_db),
    adapter: StripeWebhookAdapter = Depends(get_stripe_webhook_adapter),
):
    #signature is computed over the raw bytes, read them before any parsing
    body = await request.body()
    await run_in_threadpool(_reconcile, adapter, db, body, request)
    return {"ok": True}
