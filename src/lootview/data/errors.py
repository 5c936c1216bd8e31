"""Custom exceptions for fetching and decoding loot data."""


class LootDataError(Exception):
    """Base exception for the data layer."""


class NetworkError(LootDataError):
    """Raised on transport failures or non-success HTTP statuses."""

    def __init__(self, message: str, *, locator: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.locator = locator
        self.status_code = status_code


class ProtocolError(LootDataError):
    """Raised when a response is not the expected JSON envelope or listing."""


class EncodingError(LootDataError):
    """Raised when a payload is not valid base64 or not valid UTF-8."""


class DecodeError(LootDataError):
    """Raised when loot table text does not match the loot schema."""

    def __init__(self, message: str, *, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class NameNotFoundError(LootDataError):
    """Raised when a description file carries no quoted display name."""
