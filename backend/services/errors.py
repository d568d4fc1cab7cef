# backend/services/errors.py
"""Error taxonomy shared by the cart and auth layers.

Each error carries the HTTP status it maps to; ``main.py`` renders them
as ``{"error": message}``.
"""


class ShopError(Exception):
    status_code = 500
    default_message = "Server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ShopError):
    status_code = 400
    default_message = "Invalid request"


class InsufficientStockError(ValidationError):
    default_message = "Not enough stock available"


class NotFoundError(ShopError):
    status_code = 404
    default_message = "Not found"


class ForbiddenError(ShopError):
    status_code = 403
    default_message = "Forbidden"


class AuthError(ShopError):
    status_code = 401
    default_message = "Token is invalid"


class StorageError(ShopError):
    """Any failure of the backing store. The message never carries driver details."""

    status_code = 500
    default_message = "Server error"


class ConflictError(StorageError):
    """A write collided with a concurrent one on a unique key."""
