# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base for every error a handler turns into {"error": message}."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(StorefrontError):
    status_code = 401


class Forbidden(StorefrontError):
    status_code = 403


class InvalidArgument(StorefrontError):
    status_code = 400


class EmptyCart(InvalidArgument):
    def __init__(self, message: str = "Cart is empty"):
        super().__init__(message)


class InvalidSignature(StorefrontError):
    status_code = 400


class NotFound(StorefrontError):
    status_code = 404


class OrderNotPayable(StorefrontError):
    status_code = 400

    def __init__(self, message: str = "Order cannot be paid"):
        super().__init__(message)


class CheckoutInProgress(StorefrontError):
    status_code = 409

    def __init__(self, message: str = "A checkout for this cart is already in progress"):
        super().__init__(message)


class UpstreamFailure(StorefrontError):
    status_code = 500
