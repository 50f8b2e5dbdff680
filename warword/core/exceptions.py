"""Custom exception hierarchy for warword."""


class WarwordError(Exception):
    """Base exception for map and puzzle failures."""


class DictionaryLoadError(WarwordError):
    """Raised when the dictionary JSON cannot be fetched or parsed."""
