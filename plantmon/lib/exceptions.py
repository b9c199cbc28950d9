"""Custom exceptions for the plant monitor client.

Provides a hierarchy of domain-specific exceptions so callers can tell
transport problems from malformed payloads without catching library
exceptions directly.
"""


class PlantmonError(Exception):
    """Base exception for all application errors."""


class FetchError(PlantmonError):
    """Base exception for errors while fetching data from the monitor."""


class TransportError(FetchError):
    """Raised when the monitor cannot be reached or answers with an error status."""


class PayloadFormatError(FetchError):
    """Raised when a response parses but does not have the expected shape."""
