#import all models so they register in Base.metadata

from storefront.data.models.catalog_node import CatalogNodeModel
from storefront.data.models.product import ProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel, OrderStatus
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.user_address import UserAddressModel
from storefront.data.models.landing_content import LandingContentModel
from storefront.data.models.admin_user import AdminUserModel

__all__ = [
    "CatalogNodeModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderStatus",
    "OrderItemModel",
    "UserAddressModel",
    "LandingContentModel",
    "AdminUserModel",
]
