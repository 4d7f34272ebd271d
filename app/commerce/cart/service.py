from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.commerce.buyers import ensure_buyer_profile
from app.commerce.errors import UnauthorizedError, ValidationError
from app.db.repo.cart_repo import CartRepo
from app.db.repo.products_repo import ProductsRepo

from .errors import CartProductNotFoundError
from .types import CartLineUpdate, CartLineView


class CartService:
    @staticmethod
    async def get_cart(session: AsyncSession, *, actor_id: UUID | None) -> list[CartLineView]:
        if actor_id is None:
            raise UnauthorizedError

        await ensure_buyer_profile(session, buyer_id=actor_id)
        rows = await CartRepo.list_lines_for_display(session, actor_id)
        return [
            CartLineView(
                product_id=product.id,
                title=product.title,
                quantity=cart_item.quantity,
                price=product.price,
                currency=product.currency,
                store_id=store.id,
                store_name=store.name,
                store_slug=store.slug,
                added_at=cart_item.created_at,
            )
            for cart_item, product, store in rows
        ]

    @staticmethod
    async def add_to_cart(
        session: AsyncSession,
        *,
        actor_id: UUID | None,
        product_id: UUID | None,
        quantity: int | None,
        now_utc: datetime,
    ) -> CartLineUpdate:
        """Sets the cart quantity for a product; the (buyer, product) pair stays unique."""
        if actor_id is None:
            raise UnauthorizedError
        if product_id is None or quantity is None or quantity < 1:
            raise ValidationError

        await ensure_buyer_profile(session, buyer_id=actor_id)
        product = await ProductsRepo.get_active_by_id(session, product_id)
        if product is None:
            raise CartProductNotFoundError

        cart_item = await CartRepo.upsert_line(
            session,
            buyer_id=actor_id,
            product_id=product_id,
            quantity=quantity,
            now_utc=now_utc,
        )
        return CartLineUpdate(product_id=cart_item.product_id, quantity=cart_item.quantity)

    @staticmethod
    async def remove_from_cart(
        session: AsyncSession,
        *,
        actor_id: UUID | None,
        product_id: UUID | None,
    ) -> None:
        if actor_id is None:
            raise UnauthorizedError
        if product_id is None:
            raise ValidationError("Product ID required")

        await CartRepo.delete_line(session, buyer_id=actor_id, product_id=product_id)
