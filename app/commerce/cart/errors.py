from app.commerce.errors import NotFoundError


class CartProductNotFoundError(NotFoundError):
    default_message = "Product not found"
