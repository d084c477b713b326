# storefront/services/checkout_service.py
import secrets
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from redis.exceptions import RedisError
from sqlalchemy.orm import Session

from storefront.data.capabilities import OrderItemSchema, FULL_ORDER_ITEM_SCHEMA
from storefront.data.models.order import OrderModel, OrderStatus
from storefront.domain.context import RequestContext
from storefront.domain.errors import EmptyCart, CheckoutInProgress, InvalidArgument
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.lock_service import LockService
from storefront.services.payments.events import CheckoutLine, CheckoutRequest
from storefront.utils.formatting import format_currency
from storefront.utils.settings import WHATSAPP_NUMBER, CHECKOUT_LOCK_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

WHATSAPP = "whatsapp"


@dataclass(frozen=True)
class OrderLine:
    product_id: str
    name: str
    size: Optional[str]
    quantity: int
    unit_price_cents: int
    box_option: Optional[str] = None

    @property
    def line_total_cents(self) -> int:
        return self.unit_price_cents * self.quantity


def build_whatsapp_message(order_id: str, email: Optional[str], lines: List[OrderLine],
                           total_cents: int, order_url: Optional[str]) -> str:
    text = [
        "Olá! Quero finalizar minha cotação com a Solid Choice.",
        "",
        f"Cliente (e-mail): {email or 'sem e-mail'}",
        "",
        f"Pedido: {order_id}",
        "",
        "Itens:",
    ]
    for line in lines:
        details = f" · Tam: {line.size}" if line.size else ""
        if line.box_option:
            details += f" · Caixa: {'Sem' if line.box_option == 'sem' else 'Com'}"
        text.append(
            f"- {line.name}{details} x{line.quantity} "
            f"({format_currency(line.unit_price_cents)}) = {format_currency(line.line_total_cents)}"
        )
    text += ["", f"Total: {format_currency(total_cents)}", "", "Pode me orientar nos próximos passos?"]
    if order_url:
        text += ["", f"Link do pedido: {order_url}"]
    return "\n".join(text)


class CheckoutService:
    """
    Cart -> order.

    1. resolves the cart and its priced lines
    2. writes order + order_items and sweeps the cart in one transaction
    3. hands off to whatsapp or a hosted payment checkout
    """

    def __init__(
        self,
        db: Session,
        lock_service: LockService,
        item_schema: OrderItemSchema = FULL_ORDER_ITEM_SCHEMA,
        gateways: Optional[Dict[str, Any]] = None,
        whatsapp_number: Optional[str] = None,
        lock_ttl: Optional[int] = None,
    ):
        self.carts = CartRepo(db)
        self.orders = OrderRepo(db, item_schema)
        self.lock_service = lock_service
        self.gateways = gateways or {}
        self.whatsapp_number = whatsapp_number or WHATSAPP_NUMBER
        self.lock_ttl = lock_ttl or CHECKOUT_LOCK_TTL_SECONDS

    def _collect_lines(self, cart_id: str) -> List[OrderLine]:
        lines = []
        for item in self.carts.get_cart_items(cart_id):
            if item.quantity is None or item.quantity <= 0:
                continue
            product = item.product
            price = product.price_cents if product and isinstance(product.price_cents, int) else 0
            lines.append(
                OrderLine(
                    product_id=item.product_id,
                    name=product.name if product else item.product_id,
                    size=item.size,
                    quantity=item.quantity,
                    unit_price_cents=price,
                    box_option=item.box_option,
                )
            )
        return lines

    def _create_order(self, ctx: RequestContext, cart_id: str, source: str) -> tuple[OrderModel, List[OrderLine]]:
        lines = self._collect_lines(cart_id)
        if not lines:
            raise EmptyCart()

        total_cents = sum(line.line_total_cents for line in lines)

        try:
            order = self.orders.add_order(
                OrderModel(
                    user_id=ctx.user_id,
                    status=OrderStatus.pending.value,
                    total_cents=total_cents,
                    email=ctx.email,
                    source=source,
                    public_token=secrets.token_urlsafe(32),
                )
            )
            self.orders.add_order_items(
                order.id,
                [
                    {
                        "product_id": line.product_id,
                        "size": line.size,
                        "box_option": line.box_option,
                        "quantity": line.quantity,
                        "unit_price_cents": line.unit_price_cents,
                        "line_total_cents": line.line_total_cents,
                    }
                    for line in lines
                ],
            )
            swept = self.carts.clear_items(cart_id)
            self.orders.commit()
        except Exception:
            self.orders.rollback()
            raise

        logger.info(
            f"Order {order.id} created from cart {cart_id}: "
            f"{len(lines)} lines, total {total_cents}, {swept} cart items swept"
        )
        return order, lines

    def _release_lock(self, cart_id: str, owner: str):
        # the TTL frees the key if this fails
        try:
            self.lock_service.release_checkout_lock(cart_id, owner)
        except RedisError as e:
            logger.warning(f"Could not release checkout lock for cart {cart_id}: {e}")

    def checkout(self, ctx: RequestContext, provider: str = WHATSAPP, origin: str = "") -> Dict[str, Any]:
        if provider != WHATSAPP and provider not in self.gateways:
            raise InvalidArgument(f"Unknown checkout provider: {provider}")

        cart = self.carts.get_cart_by_user(ctx.user_id)
        if cart is None:
            raise EmptyCart()

        owner = uuid.uuid4().hex
        if not self.lock_service.acquire_checkout_lock(cart.id, owner, self.lock_ttl):
            raise CheckoutInProgress()
        try:
            order, lines = self._create_order(ctx, cart.id, source=provider)
        finally:
            self._release_lock(cart.id, owner)

        origin = (origin or "").rstrip("/")
        order_url = f"{origin}/pedido/{order.public_token}" if origin else None
        result: Dict[str, Any] = {
            "ok": True,
            "order_id": order.id,
            "public_token": order.public_token,
            "order_public_url": order_url,
        }

        if provider == WHATSAPP:
            text = build_whatsapp_message(order.id, ctx.email, lines, order.total_cents, order_url)
            result["whatsapp_url"] = f"https://wa.me/{self.whatsapp_number}?text={quote(text, safe='')}"
            return result

        session = self.gateways[provider].create_checkout(
            CheckoutRequest(
                order_id=order.id,
                amount_cents=order.total_cents,
                items=[CheckoutLine(line.name, line.quantity, line.unit_price_cents) for line in lines],
                customer_email=ctx.email,
                return_url=order_url,
            )
        )
        self.orders.update_by_id(
            order.id,
            {
                "payment_link": session.payment_link,
                "gateway_provider": provider,
                "gateway_order_id": session.gateway_order_id,
            },
        )
        logger.info(f"Order {order.id} handed off to {provider}")
        result["payment_link"] = session.payment_link
        return result
