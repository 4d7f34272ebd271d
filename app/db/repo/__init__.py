from app.db.repo.buyer_profiles_repo import BuyerProfilesRepo
from app.db.repo.cart_repo import CartRepo
from app.db.repo.credits_repo import CreditsRepo
from app.db.repo.order_items_repo import OrderItemsRepo
from app.db.repo.orders_repo import OrdersRepo
from app.db.repo.products_repo import ProductsRepo
from app.db.repo.promotion_pricing_repo import PromotionPricingRepo
from app.db.repo.stores_repo import StoresRepo
