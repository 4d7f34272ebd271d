from app.commerce.errors import ValidationError


class CreditPackageNotFoundError(ValidationError):
    default_message = "Invalid package"
