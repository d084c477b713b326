# storefront/api/routers/admin.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from storefront.api.deps import (
    get_context,
    get_db,
    get_identity_client,
    get_order_item_schema,
    get_stripe_gateway,
    request_origin,
    require_admin,
)
from storefront.data.capabilities import OrderItemSchema
from storefront.domain.context import RequestContext
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import CatalogNodeIn, CatalogNodeUpdate, IdRef, LandingIn, OrderAdminPatch
from storefront.services.catalog_service import CatalogService
from storefront.services.identity_client import IdentityClient
from storefront.services.landing_service import LandingService
from storefront.services.order_admin_service import OrderAdminService
from storefront.services.product_service import ProductService
from storefront.services.payments.stripe_gateway import StripeGateway
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/me")
def admin_me(request: Request, db: Session = Depends(get_db),
             identity: IdentityClient = Depends(get_identity_client)):
    try:
        ctx = get_context(request, db, identity)
    except StorefrontError as e:
        logger.warning(f"Admin check failed: {e.message}")
        return {"isAdmin": False}
    return {"isAdmin": bool(ctx and ctx.is_admin)}


#products
@router.get("/products")
def list_products(_: RequestContext = Depends(require_admin), db: Session = Depends(get_db)):
    return ProductService(db).list_products()


@router.post("/products")
def create_product(
    body: Dict[str, Any] = Body(...),
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).create_product(body)


@router.put("/products")
def update_product(
    body: Dict[str, Any] = Body(...),
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).update_product(body)


@router.delete("/products")
def delete_product(
    payload: IdRef,
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return ProductService(db).delete_product({"id": payload.id})


#catalog
@router.get("/catalog")
def list_catalog(_: RequestContext = Depends(require_admin), db: Session = Depends(get_db)):
    return CatalogService(db).list_nodes()


@router.post("/catalog")
def create_catalog_node(
    payload: CatalogNodeIn,
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return CatalogService(db).create_node(payload.model_dump())


@router.put("/catalog")
def update_catalog_node(
    payload: CatalogNodeUpdate,
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return CatalogService(db).update_node(payload.id, payload.patch)


@router.delete("/catalog")
def delete_catalog_node(
    payload: IdRef,
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return CatalogService(db).delete_node(payload.id)


#orders
@router.get("/orders")
def list_orders(
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
    item_schema: OrderItemSchema = Depends(get_order_item_schema),
    gateway: StripeGateway = Depends(get_stripe_gateway),
):
    return OrderAdminService(db, gateway, item_schema).list_orders()


@router.patch("/orders")
def patch_order(
    request: Request,
    payload: OrderAdminPatch,
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
    gateway: StripeGateway = Depends(get_stripe_gateway),
):
    return OrderAdminService(db, gateway).patch_order(
        payload.id,
        status=payload.status,
        payment_link=payload.payment_link,
        link_given="payment_link" in payload.model_fields_set,
        origin=request_origin(request),
    )


#landing
@router.get("/landing")
def get_landing(_: RequestContext = Depends(require_admin), db: Session = Depends(get_db)):
    return LandingService(db).get_content()


@router.put("/landing")
def save_landing(
    payload: Optional[LandingIn] = None,
    _: RequestContext = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return LandingService(db).save_content(payload.content if payload else None)
