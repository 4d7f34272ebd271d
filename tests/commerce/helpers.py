from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy.exc import IntegrityError

from app.db.models.orders import ORDER_NUMBER_CONSTRAINT
from app.db.repo.buyer_profiles_repo import BuyerProfilesRepo
from app.db.repo.cart_repo import CartRepo
from app.db.repo.credits_repo import CreditsRepo
from app.db.repo.order_items_repo import OrderItemsRepo
from app.db.repo.orders_repo import OrdersRepo
from app.db.repo.products_repo import ProductsRepo
from app.db.repo.promotion_pricing_repo import PromotionPricingRepo
from app.db.repo.stores_repo import StoresRepo

NOW_UTC = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class _DummySavepoint:
    def __init__(self, session: DummySession) -> None:
        self._session = session

    async def __aenter__(self) -> _DummySavepoint:
        self._session.savepoints_opened += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self._session.savepoints_rolled_back += 1
        return False


class DummySession:
    def __init__(self) -> None:
        self.savepoints_opened = 0
        self.savepoints_rolled_back = 0
        self.flushes = 0

    def begin_nested(self) -> _DummySavepoint:
        return _DummySavepoint(self)

    async def flush(self) -> None:
        self.flushes += 1


class DummySessionBegin:
    def __init__(self, session: DummySession) -> None:
        self.session = session
        self.exit_exc_type: type[BaseException] | None = None

    async def __aenter__(self) -> DummySession:
        return self.session

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.exit_exc_type = exc_type
        return False


class DummySessionLocal:
    def __init__(self) -> None:
        self.session = DummySession()
        self.transactions: list[DummySessionBegin] = []

    def begin(self) -> DummySessionBegin:
        transaction = DummySessionBegin(self.session)
        self.transactions.append(transaction)
        return transaction

    @property
    def committed(self) -> bool:
        return bool(self.transactions) and self.transactions[-1].exit_exc_type is None


def db_error(message: str) -> IntegrityError:
    return IntegrityError("statement", {}, Exception(message))


def order_number_conflict() -> IntegrityError:
    return db_error(f'duplicate key value violates unique constraint "{ORDER_NUMBER_CONSTRAINT}"')


@dataclass
class FakeMarketplace:
    """In-memory stand-in for every repository the commerce services call."""

    buyer_profiles: set[UUID] = field(default_factory=set)
    stores: dict[UUID, SimpleNamespace] = field(default_factory=dict)
    products: dict[UUID, SimpleNamespace] = field(default_factory=dict)
    cart: dict[tuple[UUID, UUID], SimpleNamespace] = field(default_factory=dict)
    orders: dict[UUID, Any] = field(default_factory=dict)
    order_items: list[Any] = field(default_factory=list)
    credits: dict[UUID, SimpleNamespace] = field(default_factory=dict)
    credit_transactions: list[Any] = field(default_factory=list)
    pricing: SimpleNamespace | None = None
    packages: list[SimpleNamespace] = field(default_factory=list)

    existing_order_numbers: set[str] = field(default_factory=set)
    order_create_error: Exception | None = None
    fail_order_items: bool = False
    fail_order_delete: bool = False
    fail_stock_decrement: bool = False
    fail_cart_clear: bool = False
    fail_profile_create: bool = False
    fail_credit_transaction: bool = False
    fail_promotion_window: bool = False
    promotion_window_missing: bool = False
    attempted_order_numbers: list[str] = field(default_factory=list)

    def add_store(self, *, seller_id: UUID, name: str = "Atlas Pottery") -> SimpleNamespace:
        store = SimpleNamespace(
            id=uuid4(),
            seller_id=seller_id,
            name=name,
            slug=name.lower().replace(" ", "-"),
        )
        self.stores[store.id] = store
        return store

    def add_product(
        self,
        *,
        store: SimpleNamespace,
        title: str = "Tagine",
        price: str = "120.00",
        stock_quantity: int = 5,
        status: str = "active",
    ) -> SimpleNamespace:
        product = SimpleNamespace(
            id=uuid4(),
            store_id=store.id,
            title=title,
            price=Decimal(price),
            currency="MAD",
            stock_quantity=stock_quantity,
            status=status,
            is_promoted=False,
            promoted_start_date=None,
            promoted_end_date=None,
            updated_at=NOW_UTC,
        )
        self.products[product.id] = product
        return product

    def add_to_cart(self, *, buyer_id: UUID, product: SimpleNamespace, quantity: int) -> SimpleNamespace:
        line = SimpleNamespace(
            id=uuid4(),
            buyer_id=buyer_id,
            product_id=product.id,
            quantity=quantity,
            created_at=NOW_UTC,
            updated_at=NOW_UTC,
        )
        self.cart[(buyer_id, product.id)] = line
        return line

    def set_balance(self, user_id: UUID, balance: str) -> SimpleNamespace:
        credits = SimpleNamespace(user_id=user_id, balance=Decimal(balance), updated_at=NOW_UTC)
        self.credits[user_id] = credits
        return credits

    def set_pricing(self, *, price_per_day: str = "10", min_days: int = 1, max_days: int = 30) -> None:
        self.pricing = SimpleNamespace(
            id=1,
            price_per_day=Decimal(price_per_day),
            min_days=min_days,
            max_days=max_days,
            is_active=True,
        )

    def cart_for(self, buyer_id: UUID) -> list[SimpleNamespace]:
        return [line for (owner, _), line in self.cart.items() if owner == buyer_id]

    def install(self, monkeypatch) -> None:
        market = self

        async def _get_profile(session, buyer_id: UUID):
            return SimpleNamespace(id=buyer_id) if buyer_id in market.buyer_profiles else None

        async def _create_profile(session, *, buyer_id: UUID):
            if market.fail_profile_create:
                raise db_error("permission denied for table buyer_profiles")
            market.buyer_profiles.add(buyer_id)
            return SimpleNamespace(id=buyer_id)

        async def _get_store_by_seller(session, seller_id: UUID):
            return next((store for store in market.stores.values() if store.seller_id == seller_id), None)

        async def _get_product(session, product_id: UUID):
            return market.products.get(product_id)

        async def _get_active_product(session, product_id: UUID):
            product = market.products.get(product_id)
            if product is None or product.status != "active":
                return None
            return product

        async def _get_titles(session, product_ids):
            return {
                product_id: market.products[product_id].title
                for product_id in product_ids
                if product_id in market.products
            }

        async def _decrement_stock(session, *, product_id: UUID, quantity: int, now_utc: datetime) -> bool:
            if market.fail_stock_decrement:
                raise db_error("deadlock detected")
            product = market.products.get(product_id)
            if product is None or product.stock_quantity < quantity:
                return False
            product.stock_quantity -= quantity
            product.updated_at = now_utc
            return True

        async def _set_promotion_window(
            session,
            *,
            product_id: UUID,
            starts_at: datetime | None,
            ends_at: datetime | None,
            now_utc: datetime,
        ) -> bool:
            if market.fail_promotion_window:
                raise db_error("could not serialize access")
            product = market.products.get(product_id)
            if product is None or market.promotion_window_missing:
                return False
            product.is_promoted = starts_at is not None
            product.promoted_start_date = starts_at
            product.promoted_end_date = ends_at
            product.updated_at = now_utc
            return True

        async def _list_checkout_lines(session, buyer_id: UUID):
            return [
                (line, market.products[line.product_id])
                for line in market.cart_for(buyer_id)
                if line.product_id in market.products
            ]

        async def _list_display_lines(session, buyer_id: UUID):
            rows = []
            for line in market.cart_for(buyer_id):
                product = market.products.get(line.product_id)
                if product is None:
                    continue
                rows.append((line, product, market.stores[product.store_id]))
            return sorted(rows, key=lambda row: row[0].created_at, reverse=True)

        async def _upsert_line(session, *, buyer_id: UUID, product_id: UUID, quantity: int, now_utc: datetime):
            line = market.cart.get((buyer_id, product_id))
            if line is None:
                line = SimpleNamespace(
                    id=uuid4(),
                    buyer_id=buyer_id,
                    product_id=product_id,
                    quantity=quantity,
                    created_at=now_utc,
                    updated_at=now_utc,
                )
                market.cart[(buyer_id, product_id)] = line
            else:
                line.quantity = quantity
                line.updated_at = now_utc
            return line

        async def _delete_line(session, *, buyer_id: UUID, product_id: UUID) -> int:
            return 1 if market.cart.pop((buyer_id, product_id), None) is not None else 0

        async def _clear_cart(session, buyer_id: UUID) -> int:
            if market.fail_cart_clear:
                raise db_error("cart_items is locked")
            keys = [key for key in market.cart if key[0] == buyer_id]
            for key in keys:
                del market.cart[key]
            return len(keys)

        async def _create_order(session, *, order):
            market.attempted_order_numbers.append(order.order_number)
            if market.order_create_error is not None:
                raise market.order_create_error
            if order.order_number in market.existing_order_numbers:
                raise order_number_conflict()
            market.existing_order_numbers.add(order.order_number)
            market.orders[order.id] = order
            return order

        async def _delete_order(session, order_id: UUID) -> int:
            if market.fail_order_delete:
                raise db_error("orders is locked")
            order = market.orders.pop(order_id, None)
            if order is None:
                return 0
            market.existing_order_numbers.discard(order.order_number)
            market.order_items[:] = [item for item in market.order_items if item.order_id != order_id]
            return 1

        async def _get_order(session, order_id: UUID):
            return market.orders.get(order_id)

        def _store_order_ids(store_id: UUID) -> set[UUID]:
            return {
                item.order_id
                for item in market.order_items
                if item.product_id in market.products and market.products[item.product_id].store_id == store_id
            }

        def _newest(orders, *, limit: int, status: str | None):
            selected = [order for order in orders if status is None or order.status == status]
            selected.sort(key=lambda order: order.created_at, reverse=True)
            return selected[:limit]

        async def _list_for_buyer(session, *, buyer_id: UUID, limit: int, status: str | None = None):
            return _newest(
                [order for order in market.orders.values() if order.buyer_id == buyer_id],
                limit=limit,
                status=status,
            )

        async def _list_for_store(session, *, store_id: UUID, limit: int, status: str | None = None):
            order_ids = _store_order_ids(store_id)
            return _newest(
                [order for order in market.orders.values() if order.id in order_ids],
                limit=limit,
                status=status,
            )

        async def _contains_store_products(session, *, order_id: UUID, store_id: UUID) -> bool:
            return order_id in _store_order_ids(store_id)

        async def _update_status(session, *, order_id: UUID, status: str, now_utc: datetime) -> bool:
            order = market.orders.get(order_id)
            if order is None:
                return False
            order.status = status
            order.updated_at = now_utc
            return True

        async def _create_items(session, *, items):
            if market.fail_order_items:
                raise db_error('insert or update on table "order_items" violates foreign key constraint')
            market.order_items.extend(items)
            return list(items)

        async def _list_items(session, order_ids):
            wanted = set(order_ids)
            return [item for item in market.order_items if item.order_id in wanted]

        async def _get_balance(session, user_id: UUID):
            return market.credits.get(user_id)

        async def _create_balance(session, *, user_id: UUID, balance: Decimal = Decimal("0")):
            return market.set_balance(user_id, str(balance))

        async def _create_transaction(session, *, transaction):
            if market.fail_credit_transaction:
                raise db_error("credit_transactions is read-only")
            market.credit_transactions.append(transaction)
            return transaction

        async def _list_packages(session):
            return sorted(
                (package for package in market.packages if package.is_active),
                key=lambda package: package.order_index,
            )

        async def _get_package(session, package_id: int):
            return next(
                (
                    package
                    for package in market.packages
                    if package.id == package_id and package.is_active
                ),
                None,
            )

        async def _get_pricing(session):
            return market.pricing

        monkeypatch.setattr(BuyerProfilesRepo, "get_by_id", _get_profile)
        monkeypatch.setattr(BuyerProfilesRepo, "create", _create_profile)
        monkeypatch.setattr(StoresRepo, "get_by_seller_id", _get_store_by_seller)
        monkeypatch.setattr(ProductsRepo, "get_by_id", _get_product)
        monkeypatch.setattr(ProductsRepo, "get_active_by_id", _get_active_product)
        monkeypatch.setattr(ProductsRepo, "get_titles", _get_titles)
        monkeypatch.setattr(ProductsRepo, "decrement_stock", _decrement_stock)
        monkeypatch.setattr(ProductsRepo, "set_promotion_window", _set_promotion_window)
        monkeypatch.setattr(CartRepo, "list_lines_for_checkout", _list_checkout_lines)
        monkeypatch.setattr(CartRepo, "list_lines_for_display", _list_display_lines)
        monkeypatch.setattr(CartRepo, "upsert_line", _upsert_line)
        monkeypatch.setattr(CartRepo, "delete_line", _delete_line)
        monkeypatch.setattr(CartRepo, "clear_for_buyer", _clear_cart)
        monkeypatch.setattr(OrdersRepo, "create", _create_order)
        monkeypatch.setattr(OrdersRepo, "delete_by_id", _delete_order)
        monkeypatch.setattr(OrdersRepo, "get_by_id", _get_order)
        monkeypatch.setattr(OrdersRepo, "list_for_buyer", _list_for_buyer)
        monkeypatch.setattr(OrdersRepo, "list_for_store", _list_for_store)
        monkeypatch.setattr(OrdersRepo, "contains_store_products", _contains_store_products)
        monkeypatch.setattr(OrdersRepo, "update_status", _update_status)
        monkeypatch.setattr(OrderItemsRepo, "create_many", _create_items)
        monkeypatch.setattr(OrderItemsRepo, "list_for_orders", _list_items)
        monkeypatch.setattr(CreditsRepo, "get_balance", _get_balance)
        monkeypatch.setattr(CreditsRepo, "get_balance_for_update", _get_balance)
        monkeypatch.setattr(CreditsRepo, "create_balance", _create_balance)
        monkeypatch.setattr(CreditsRepo, "create_transaction", _create_transaction)
        monkeypatch.setattr(CreditsRepo, "list_active_packages", _list_packages)
        monkeypatch.setattr(CreditsRepo, "get_active_package", _get_package)
        monkeypatch.setattr(PromotionPricingRepo, "get_active", _get_pricing)
