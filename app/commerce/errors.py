class CommerceError(Exception):
    """Base for business-rule failures that are safe to show to end users."""

    default_message = "Request could not be completed"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UnauthorizedError(CommerceError):
    default_message = "Unauthorized"


class ForbiddenError(CommerceError):
    default_message = "Forbidden"


class ValidationError(CommerceError):
    default_message = "Invalid request"


class NotFoundError(CommerceError):
    default_message = "Not found"


class ConfigurationError(CommerceError):
    default_message = "Service is not configured"
