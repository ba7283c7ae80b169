"""Custom exception hierarchy for fiado."""


class FiadoError(Exception):
    """Base exception for all fiado errors."""


class ValidationError(FiadoError):
    """Raised when user input is rejected before reaching the store."""


class StoreError(FiadoError):
    """Raised when a ledger store operation fails."""


class EntityNotFoundError(StoreError):
    """Raised when a referenced customer does not exist in the store."""


class ConfigurationError(FiadoError):
    """Raised when configuration is invalid or missing."""
