from app.db.models.buyer_profiles import BuyerProfile
from app.db.models.cart_items import CartItem
from app.db.models.credit_packages import CreditPackage
from app.db.models.credit_transactions import CreditTransaction
from app.db.models.order_items import OrderItem
from app.db.models.orders import Order
from app.db.models.products import Product
from app.db.models.promotion_pricing import PromotionPricing
from app.db.models.stores import Store
from app.db.models.user_credits import UserCredits

__all__ = [
    "BuyerProfile",
    "CartItem",
    "CreditPackage",
    "CreditTransaction",
    "Order",
    "OrderItem",
    "Product",
    "PromotionPricing",
    "Store",
    "UserCredits",
]
