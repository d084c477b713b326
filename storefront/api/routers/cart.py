# storefront/api/routers/cart.py
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from storefront.api.deps import (
    get_db,
    get_lock_service,
    get_order_item_schema,
    get_pagarme_gateway,
    get_stripe_gateway,
    request_origin,
    require_user,
)
from storefront.data.capabilities import OrderItemSchema
from storefront.domain.context import RequestContext
from storefront.domain.schemas import CartItemIn, CartItemPatch, CartItemRef, CartOut, CheckoutIn
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.lock_service import LockService
from storefront.services.payments.pagarme import PagarmeGateway
from storefront.services.payments.stripe_gateway import StripeGateway

router = APIRouter(prefix="/api/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("", response_model=CartOut)
def get_cart(ctx: RequestContext = Depends(require_user), db: Session = Depends(get_db)):
    return get_service(db).list_items(ctx.user_id)


@router.post("")
def add_item(
    payload: CartItemIn,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    return get_service(db).add_item(
        user_id=ctx.user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
        size=payload.size,
        box_option=payload.box_option,
    )


@router.patch("")
def update_item(
    payload: CartItemPatch,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    return get_service(db).update_item(ctx.user_id, payload.item_id, payload.quantity)


@router.delete("")
def remove_item(
    payload: CartItemRef,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
):
    return get_service(db).remove_item(ctx.user_id, payload.item_id)


@router.post("/checkout")
def checkout(
    request: Request,
    payload: Optional[CheckoutIn] = None,
    ctx: RequestContext = Depends(require_user),
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    item_schema: OrderItemSchema = Depends(get_order_item_schema),
    stripe_gateway: StripeGateway = Depends(get_stripe_gateway),
    pagarme_gateway: PagarmeGateway = Depends(get_pagarme_gateway),
):
    svc = CheckoutService(
        db=db,
        lock_service=lock_service,
        item_schema=item_schema,
        gateways={"stripe": stripe_gateway, "pagarme": pagarme_gateway},
    )
    provider = payload.provider if payload else "whatsapp"
    return svc.checkout(ctx, provider=provider, origin=request_origin(request))
