# storefront/api/deps.py
import re
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.data.capabilities import OrderItemSchema, FULL_ORDER_ITEM_SCHEMA
from storefront.data.database import get_db
from storefront.domain.context import RequestContext
from storefront.domain.errors import Unauthorized, Forbidden
from storefront.repos.admin_repo import AdminRepo
from storefront.services.identity_client import IdentityClient
from storefront.services.lock_service import LockService
from storefront.services.payments.pagarme import PagarmeGateway, PagarmeWebhookAdapter
from storefront.services.payments.stripe_gateway import StripeGateway, StripeWebhookAdapter
from storefront.utils.settings import SITE_URL

_BEARER = re.compile(r"^Bearer\s+(.+)$", re.IGNORECASE)

__all__ = [
    "get_db",
    "get_identity_client",
    "get_lock_service",
    "get_stripe_gateway",
    "get_pagarme_gateway",
    "get_stripe_webhook_adapter",
    "get_pagarme_webhook_adapter",
    "get_order_item_schema",
    "get_context",
    "require_user",
    "require_admin",
    "request_origin",
]


@lru_cache
def get_identity_client() -> IdentityClient:
    return IdentityClient()


@lru_cache
def get_lock_service() -> LockService:
    return LockService()


@lru_cache
def get_stripe_gateway() -> StripeGateway:
    return StripeGateway()


@lru_cache
def get_pagarme_gateway() -> PagarmeGateway:
    return PagarmeGateway()


def get_stripe_webhook_adapter() -> StripeWebhookAdapter:
    return StripeWebhookAdapter()


def get_pagarme_webhook_adapter() -> PagarmeWebhookAdapter:
    return PagarmeWebhookAdapter()


def get_order_item_schema(request: Request) -> OrderItemSchema:
    return getattr(request.app.state, "order_item_schema", FULL_ORDER_ITEM_SCHEMA)


def bearer_token(request: Request) -> Optional[str]:
    match = _BEARER.match(request.headers.get("authorization", "").strip())
    return match.group(1).strip() if match else None


def get_context(
    request: Request,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
) -> Optional[RequestContext]:
    """Caller identity and admin flag, or None for anonymous/invalid tokens."""
    token = bearer_token(request)
    if not token:
        return None
    user = identity.get_user(token)
    if user is None:
        return None
    return RequestContext(
        user_id=user.id,
        email=user.email,
        is_admin=AdminRepo(db).is_admin(user.id),
    )


def require_user(
    request: Request,
    db: Session = Depends(get_db),
    identity: IdentityClient = Depends(get_identity_client),
) -> RequestContext:
    if not bearer_token(request):
        raise Unauthorized("Missing bearer token")
    ctx = get_context(request, db, identity)
    if ctx is None:
        raise Unauthorized("Invalid token")
    return ctx


def require_admin(ctx: RequestContext = Depends(require_user)) -> RequestContext:
    if not ctx.is_admin:
        raise Forbidden("Forbidden")
    return ctx


def request_origin(request: Request) -> str:
    origin = request.headers.get("origin") or SITE_URL or str(request.base_url)
    return origin.rstrip("/")
