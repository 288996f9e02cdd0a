class ShopError(Exception):
    """Base class for failures surfaced to API callers."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(ShopError):
    status_code = 400


class NotFoundError(ShopError):
    status_code = 404


class ConflictError(ShopError):
    """The request is well formed but breaks a store invariant."""

    status_code = 409


class InsufficientStockError(ConflictError):
    pass


class EmptyCartError(ConflictError):
    pass


class ProductInUseError(ConflictError):
    pass


class DuplicateEmailError(ConflictError):
    pass


class CartChangedError(ConflictError):
    pass
