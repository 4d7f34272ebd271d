from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4


def test_cart_roundtrip(api, marketplace) -> None:
    store = marketplace.add_store(seller_id=uuid4(), name="Sahara Leather")
    product = marketplace.add_product(store=store, title="Babouche", price="75.50")

    add_response = api.client.post("/cart", json={"productId": str(product.id), "quantity": 2})
    get_response = api.client.get("/cart")
    delete_response = api.client.delete("/cart", params={"productId": str(product.id)})

    assert add_response.status_code == 200
    assert add_response.json() == {"success": True, "productId": str(product.id), "quantity": 2}
    (item,) = get_response.json()["items"]
    assert item["title"] == "Babouche"
    assert item["price"] == "75.50"
    assert item["storeName"] == "Sahara Leather"
    assert delete_response.json() == {"success": True}
    assert marketplace.cart_for(api.actor_id) == []


def test_add_unknown_product_is_404(api, marketplace) -> None:
    response = api.client.post("/cart", json={"productId": str(uuid4()), "quantity": 1})

    assert response.status_code == 404
    assert response.json() == {"error": "Product not found"}


def test_remove_without_product_is_400(api, marketplace) -> None:
    response = api.client.delete("/cart")

    assert response.status_code == 400
    assert response.json() == {"error": "Product ID required"}


def test_credits_balance_and_purchase(api, marketplace) -> None:
    marketplace.packages = [
        SimpleNamespace(
            id=3,
            name="Starter",
            credits_amount=Decimal("100"),
            bonus_credits=Decimal("10"),
            price=Decimal("99.00"),
            is_active=True,
            order_index=1,
        )
    ]

    balance_response = api.client.get("/credits/balance")
    packages_response = api.client.get("/credits/packages")
    purchase_response = api.client.post("/credits/purchase", json={"packageId": 3})

    assert balance_response.json() == {"balance": "0"}
    (package,) = packages_response.json()["packages"]
    assert package["totalCredits"] == "110"
    assert purchase_response.json() == {"success": True, "creditsAdded": "110", "newBalance": "110"}


def test_purchase_unknown_package_is_400(api, marketplace) -> None:
    response = api.client.post("/credits/purchase", json={"packageId": 42})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid package"}
