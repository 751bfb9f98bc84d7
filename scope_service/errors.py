"""Errors raised by the scope resolution core.

The HTTP layer translates them: LocationNotFound -> 404,
InvalidLocationSet -> 400, StoreError -> 500 (details only logged).
"""


class ScopeError(Exception):
    """Base class for all scope service errors."""


class LocationNotFound(ScopeError):
    """An organization or location identifier does not resolve."""


class InvalidLocationSet(ScopeError):
    """The caller supplied no identifiers, or some did not resolve."""


class StoreError(ScopeError):
    """The graph store is unreachable or rejected a query or update."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message)
        self.operation = operation
