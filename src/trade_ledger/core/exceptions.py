"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when trade input fails validation."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class TradeRejectedError(AppError):
    """Base for business rejections of an otherwise valid trade."""

    reason: str = "Trade rejected"


class InsufficientSharesError(TradeRejectedError):
    """Raised when attempting to sell more shares than owned."""

    reason = "Insufficient shares"

    def __init__(self, symbol: str, requested: str, available: str):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
        )


class InsufficientFundsError(TradeRejectedError):
    """Raised when a purchase costs more than the available cash."""

    reason = "Insufficient funds"

    def __init__(self, requested: str, available: str):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )


class StorageError(AppError):
    """Raised when the ledger store fails; the surrounding transaction is rolled back."""

    def __init__(self, message: str):
        super().__init__(message, code="STORAGE_ERROR")
