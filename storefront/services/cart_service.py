# storefront/services/cart_service.py
import math
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import InvalidArgument, NotFound
from storefront.repos.cart_repo import CartRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

BOX_OPTIONS = ("com", "sem")


def parse_quantity(value: Any, allow_zero: bool) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidArgument("Invalid quantity")
    if value < 0 or (value == 0 and not allow_zero):
        raise InvalidArgument("Invalid quantity")
    if value != int(value):
        raise InvalidArgument("Quantity must be a whole number")
    return int(value)


class CartService:
    """
    One cart per user, created lazily.
    Line items are unique per (cart, product), a repeated add accumulates.
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)

    #query
    def ensure_cart(self, user_id: str) -> str:
        existing = self.repo.get_cart_by_user(user_id)
        if existing:
            return existing.id

        try:
            created = self.repo.create_cart(CartModel(user_id=user_id))
        except IntegrityError:
            # a concurrent request created it first
            self.repo.rollback()
            existing = self.repo.get_cart_by_user(user_id)
            if not existing:
                raise
            return existing.id

        logger.info(f"Created cart {created.id} for user {user_id}")
        return created.id

    def list_items(self, user_id: str) -> Dict[str, Any]:
        cart_id = self.ensure_cart(user_id)
        items = self.repo.get_cart_items(cart_id)
        return {"cart_id": cart_id, "items": items}

    #commands
    def add_item(self, user_id: str, product_id: Optional[str], quantity: Any = None,
                 size: Optional[str] = None, box_option: Optional[str] = None) -> Dict[str, Any]:
        product_id = (product_id or "").strip()
        if not product_id:
            raise InvalidArgument("product_id is required")
        qty = parse_quantity(1 if quantity is None else quantity, allow_zero=False)
        size = (size or "").strip() or None
        box_option = (box_option or "").strip().lower() or None
        if box_option is not None and box_option not in BOX_OPTIONS:
            raise InvalidArgument("box_option must be \"com\" or \"sem\"")

        if not self.repo.product_exists(product_id):
            raise NotFound("Product not found")

        cart_id = self.ensure_cart(user_id)

        existing = self.repo.get_cart_item(cart_id, product_id)
        if existing is None:
            try:
                created = self.repo.add_cart_item(
                    CartItemModel(
                        cart_id=cart_id, product_id=product_id, quantity=qty, size=size, box_option=box_option,
                    )
                )
                logger.info(f"Added product {product_id} x{qty} to cart {cart_id}")
                return {"ok": True, "item_id": created.id, "quantity": created.quantity}
            except IntegrityError:
                #lost the insert race, merge into the row that won
                self.repo.rollback()
                existing = self.repo.get_cart_item(cart_id, product_id)
                if existing is None:
                    raise

        logger.info(
            f"Product {product_id} already in cart {cart_id}, quantity "
            f"{existing.quantity} -> {existing.quantity + qty}"
        )
        existing.quantity += qty
        if size:
            existing.size = size
        if box_option:
            existing.box_option = box_option
        self.repo.commit()
        return {"ok": True, "item_id": existing.id, "quantity": existing.quantity}

    def _owned_item(self, user_id: str, item_id: str) -> CartItemModel | None:
        cart = self.repo.get_cart_by_user(user_id)
        item = self.repo.get_item(item_id)
        if cart is None or item is None or item.cart_id != cart.id:
            return None
        return item

    def update_item(self, user_id: str, item_id: Optional[str], quantity: Any) -> Dict[str, Any]:
        item_id = (item_id or "").strip()
        if not item_id:
            raise InvalidArgument("item_id is required")
        qty = parse_quantity(quantity, allow_zero=True)

        item = self._owned_item(user_id, item_id)

        if qty == 0:
            if item is not None:
                self.repo.delete_item(item.id)
                logger.info(f"Removed cart item {item_id} (quantity 0)")
            return {"ok": True, "deleted": True}

        if item is None:
            raise NotFound("Cart item not found")

        item.quantity = qty
        self.repo.commit()
        return {"ok": True, "quantity": qty}

    def remove_item(self, user_id: str, item_id: Optional[str]) -> Dict[str, Any]:
        item_id = (item_id or "").strip()
        if not item_id:
            raise InvalidArgument("item_id is required")

        item = self._owned_item(user_id, item_id)
        if item is not None:
            self.repo.delete_item(item.id)
            logger.info(f"Removed cart item {item_id}")
        return {"ok": True}
