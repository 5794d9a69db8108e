"""Storefront error taxonomy."""


class StorefrontError(Exception):
    """Base class for errors surfaced to shoppers and admins."""

    user_message: str = "Щось пішло не так. Спробуйте ще раз."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.user_message)
        if message:
            self.user_message = message


class AuthenticationError(StorefrontError):
    """Raised when the auth service rejects the credentials."""

    user_message = "Помилка авторизації. Перевірте дані."


class MissingImageError(StorefrontError):
    """Raised when a dish is created without a photo."""

    user_message = "Будь ласка, оберіть фото страви"


class DishWriteError(StorefrontError):
    """Raised when a remote upload or dish write fails."""

    user_message = "Помилка при додаванні страви"


class EmptyCartError(StorefrontError):
    """Raised when checkout is requested for an empty cart."""

    user_message = "Кошик порожній"


class CheckoutValidationError(StorefrontError):
    """Raised when required contact fields are blank."""

    user_message = "Заповніть ім'я, телефон та адресу доставки"

    def __init__(self, missing_fields: list[str]) -> None:
        super().__init__()
        self.missing_fields = missing_fields


class CheckoutStateError(StorefrontError):
    """Raised on a checkout transition that the current state does not allow."""

    user_message = "Неможливо виконати дію на цьому кроці оформлення"
