# storefront/domain/schemas.py
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict


class CartItemIn(BaseModel):
    """Body of POST /api/cart. Values are checked by CartService."""

    product_id: Optional[str] = None
    # raw JSON value, CartService rejects bools, strings and fractions
    quantity: Any = None
    size: Optional[str] = None
    box_option: Optional[str] = None


class CartItemPatch(BaseModel):
    item_id: Optional[str] = None
    quantity: Any = None


class CartItemRef(BaseModel):
    item_id: Optional[str] = None


class CartProductOut(BaseModel):
    id: str
    name: str
    price_cents: Optional[int] = None
    hero_image: Optional[str] = None
    slug: Optional[str] = None
    category: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CartLineOut(BaseModel):
    id: str
    quantity: int
    size: Optional[str] = None
    box_option: Optional[str] = None
    product: Optional[CartProductOut] = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    cart_id: str
    items: List[CartLineOut]


class CheckoutIn(BaseModel):
    provider: Literal["whatsapp", "stripe", "pagarme"] = "whatsapp"


class ShippingIn(BaseModel):
    shipping_name: Optional[str] = None
    shipping_phone: Optional[str] = None
    shipping_address: Optional[str] = None
    shipping_city: Optional[str] = None
    shipping_state: Optional[str] = None
    shipping_zip: Optional[str] = None
    shipping_notes: Optional[str] = None


class AddressIn(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    notes: Optional[str] = None


class IdRef(BaseModel):
    id: Optional[str] = None


class CatalogNodeIn(BaseModel):
    kind: Optional[str] = None
    parent_id: Optional[str] = None
    label: Optional[str] = None
    slug: Optional[str] = None
    logo_url: Optional[str] = None
    banner_url: Optional[str] = None
    sort_order: Optional[float] = None


class CatalogNodeUpdate(BaseModel):
    id: Optional[str] = None
    patch: dict = {}


class OrderAdminPatch(BaseModel):
    id: Optional[str] = None
    status: Optional[str] = None
    payment_link: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class LandingIn(BaseModel):
    content: Any = None
