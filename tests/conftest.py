import hashlib
import hmac
import os
import time

#must be set before storefront.utils.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SITE_URL"] = "https://solidchoice.test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select, func

from storefront.api import deps
from storefront.data.capabilities import FULL_ORDER_ITEM_SCHEMA
from storefront.data.database import Base, SessionLocal, engine
from storefront.data.models import (
    AdminUserModel,
    CartItemModel,
    CartModel,
    CatalogNodeModel,
    LandingContentModel,
    OrderItemModel,
    OrderModel,
    ProductModel,
)
from storefront.main import app
from storefront.services.identity_client import IdentityUser
from storefront.services.payments.events import CheckoutSession, PaymentIntentHandle
from storefront.services.payments.pagarme import PagarmeWebhookAdapter
from storefront.services.payments.stripe_gateway import StripeWebhookAdapter

STRIPE_WEBHOOK_SECRET = "whsec_test_secret"
PAGARME_HOOK_TOKEN = "hook-token"

USER = {"Authorization": "Bearer user-token"}
OTHER_USER = {"Authorization": "Bearer other-token"}
ADMIN = {"Authorization": "Bearer admin-token"}


class FakeIdentity:
    users = {
        "user-token": IdentityUser(id="user-1", email="buyer@example.com"),
        "other-token": IdentityUser(id="user-2", email="other@example.com"),
        "admin-token": IdentityUser(id="admin-1", email="admin@example.com"),
    }

    def get_user(self, token):
        return self.users.get(token)


class FakeLock:
    def __init__(self):
        self.held = {}

    def acquire_checkout_lock(self, cart_id, owner, ttl):
        if cart_id in self.held:
            return False
        self.held[cart_id] = owner
        return True

    def release_checkout_lock(self, cart_id, owner):
        if self.held.get(cart_id) != owner:
            return False
        del self.held[cart_id]
        return True


class FakeStripeGateway:
    def __init__(self):
        self.intents = {}
        self.checkouts = []

    def create_payment_intent(self, order_id, amount_cents, customer_email=None):
        intent_id = f"pi_test_{len(self.intents) + 1}"
        self.intents[intent_id] = {"order_id": order_id, "amount_cents": amount_cents}
        return PaymentIntentHandle(id=intent_id, client_secret=f"{intent_id}_secret")

    def retrieve_payment_intent(self, intent_id):
        return PaymentIntentHandle(id=intent_id, client_secret=f"{intent_id}_secret")

    def create_checkout(self, req):
        self.checkouts.append(req)
        return CheckoutSession(
            payment_link=f"https://checkout.stripe.test/{req.order_id}",
            gateway_order_id=f"cs_test_{len(self.checkouts)}",
        )


class FakePagarmeGateway:
    def __init__(self):
        self.checkouts = []

    def create_checkout(self, req):
        self.checkouts.append(req)
        return CheckoutSession(
            payment_link=f"https://pagar.me/checkout/{req.order_id}",
            gateway_order_id=f"or_test_{len(self.checkouts)}",
        )


class Store:
    """Seeds and inspects the database with short-lived sessions."""

    def _add(self, obj):
        with SessionLocal() as db:
            db.add(obj)
            db.commit()
            db.refresh(obj)
            db.expunge(obj)
        return obj

    def add_product(self, name="Tenis Runner", price_cents=1000, **kw):
        kw.setdefault("slug", name.lower().replace(" ", "-"))
        return self._add(ProductModel(name=name, price_cents=price_cents, **kw)).id

    def add_catalog_node(self, kind="main", label="Tenis", slug="tenis", **kw):
        return self._add(CatalogNodeModel(kind=kind, label=label, slug=slug, **kw)).id

    def add_order(self, **kw):
        kw.setdefault("status", "pending")
        kw.setdefault("total_cents", 5000)
        return self._add(OrderModel(**kw))

    def add_order_item(self, order_id, product_id, quantity=1, **kw):
        return self._add(OrderItemModel(order_id=order_id, product_id=product_id, quantity=quantity, **kw))

    def add_cart(self, user_id="user-1"):
        return self._add(CartModel(user_id=user_id)).id

    def add_cart_item(self, cart_id, product_id, quantity=1, size=None):
        return self._add(CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity, size=size)).id

    def make_admin(self, user_id="admin-1"):
        self._add(AdminUserModel(user_id=user_id))

    def set_landing(self, content):
        self._add(LandingContentModel(key="default", content=content))

    def get_order(self, order_id):
        with SessionLocal() as db:
            order = db.get(OrderModel, order_id)
            if order is not None:
                db.expunge(order)
            return order

    def get_product(self, product_id):
        with SessionLocal() as db:
            product = db.get(ProductModel, product_id)
            if product is not None:
                db.expunge(product)
            return product

    def orders(self):
        with SessionLocal() as db:
            rows = db.execute(select(OrderModel)).scalars().all()
            for row in rows:
                db.expunge(row)
            return rows

    def order_items(self, order_id):
        with SessionLocal() as db:
            rows = db.execute(
                select(OrderItemModel).where(OrderItemModel.order_id == order_id)
            ).scalars().all()
            for row in rows:
                db.expunge(row)
            return rows

    def cart_item_count(self, user_id):
        with SessionLocal() as db:
            return db.execute(
                select(func.count(CartItemModel.id))
                .join(CartModel, CartModel.id == CartItemModel.cart_id)
                .where(CartModel.user_id == user_id)
            ).scalar_one()


def stripe_signature(payload: str, secret: str = STRIPE_WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    timestamp = timestamp or int(time.time())
    signed = f"{timestamp}.{payload}".encode()
    digest = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    app.state.order_item_schema = FULL_ORDER_ITEM_SCHEMA
    yield


@pytest.fixture
def lock():
    return FakeLock()


@pytest.fixture
def stripe_gateway():
    return FakeStripeGateway()


@pytest.fixture
def pagarme_gateway():
    return FakePagarmeGateway()


@pytest.fixture
def client(lock, stripe_gateway, pagarme_gateway):
    identity = FakeIdentity()
    app.dependency_overrides[deps.get_identity_client] = lambda: identity
    app.dependency_overrides[deps.get_lock_service] = lambda: lock
    app.dependency_overrides[deps.get_stripe_gateway] = lambda: stripe_gateway
    app.dependency_overrides[deps.get_pagarme_gateway] = lambda: pagarme_gateway
    app.dependency_overrides[deps.get_stripe_webhook_adapter] = (
        lambda: StripeWebhookAdapter(webhook_secret=STRIPE_WEBHOOK_SECRET)
    )
    app.dependency_overrides[deps.get_pagarme_webhook_adapter] = (
        lambda: PagarmeWebhookAdapter(expected_token=PAGARME_HOOK_TOKEN)
    )
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def store():
    return Store()
