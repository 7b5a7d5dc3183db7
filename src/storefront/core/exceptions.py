"""Error taxonomy for Storefront.

Every error raised by a domain service derives from StorefrontError and
carries the HTTP status code and the client-facing message used by the
API exception handlers to build the response envelope.
"""


class StorefrontError(Exception):
    """Base exception for all expected request failures."""

    status_code: int = 500
    default_message: str = "Unknown error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# Validation failures (400)


class ValidationFailed(StorefrontError):
    """A single field failed validation.

    Attributes:
        field: Name of the first offending field.
        message: Human-readable reason.
    """

    status_code = 400
    default_message = "Invalid data"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class InvalidId(StorefrontError):
    status_code = 400
    default_message = "Invalid product ID"


class MissingCredentials(StorefrontError):
    status_code = 400
    default_message = "Missing credentials"


# Not found (404)


class NotFound(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ProductNotFound(NotFound):
    default_message = "Product not found"


# Forbidden state (400)


class ProductNotForSale(StorefrontError):
    status_code = 400
    default_message = "Product not for sale"


class EmptyCart(StorefrontError):
    status_code = 400
    default_message = "Cart is empty"


class ContainsUnlistedProduct(StorefrontError):
    status_code = 400
    default_message = "Cart contains unlisted product"


# Identity failures


class AccountNotFound(StorefrontError):
    status_code = 400
    default_message = "Account does not exist"


class InvalidPassword(StorefrontError):
    status_code = 400
    default_message = "Incorrect password"


class InvalidSession(StorefrontError):
    status_code = 401
    default_message = "Invalid session"


class SessionExpired(StorefrontError):
    status_code = 401
    default_message = "Session expired"


# Conflicts, roles and throttling


class Conflict(StorefrontError):
    """A unique field already exists or a concurrent write won the race."""

    status_code = 409
    default_message = "Conflict"

    def __init__(self, message: str | None = None, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class Forbidden(StorefrontError):
    status_code = 403
    default_message = "Permission denied"


class RateLimited(StorefrontError):
    status_code = 429
    default_message = "Too many requests"
