# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, get_order_item_schema, get_stripe_gateway, require_user
from storefront.data.capabilities import OrderItemSchema
from storefront.domain.context import RequestContext
from storefront.domain.schemas import ShippingIn
from storefront.services.order_view_service import OrderViewService
from storefront.services.payments.intents import PaymentIntentService
from storefront.services.payments.stripe_gateway import StripeGateway

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_service(db: Session, item_schema: OrderItemSchema):
    return OrderViewService(db=db, item_schema=item_schema)


@router.get("/me")
def my_orders(
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
    item_schema: OrderItemSchema = Depends(get_order_item_schema),
):
    return get_service(db, item_schema).list_confirmed_for_user(ctx.user_id)


@router.get("/public/{token}")
def get_public_order(
    token: str,
    db: Session = Depends(get_db),
    item_schema: OrderItemSchema = Depends(get_order_item_schema),
):
    return get_service(db, item_schema).get_by_public_token(token)


@router.patch("/public/{token}")
def patch_public_order(
    token: str,
    payload: ShippingIn,
    db: Session = Depends(get_db),
    item_schema: OrderItemSchema = Depends(get_order_item_schema),
):
    return get_service(db, item_schema).patch_shipping(token, payload.model_dump())


@router.post("/public/{token}/payment-intent")
def create_payment_intent(
    token: str,
    db: Session = Depends(get_db),
    gateway: StripeGateway = Depends(get_stripe_gateway),
):
    return PaymentIntentService(db=db, gateway=gateway).bootstrap(token)
