"""
Error taxonomy shared by the stores, repositories and the HTTP layer.

A point lookup that finds nothing is not an error: repositories return None
and the caller decides between 404 and an empty result.
"""


class WellbeingError(Exception):
    """Base class for all well-being log errors."""


class StoreUnavailable(WellbeingError):
    """The backing store could not be reached or rejected the query."""


class ConstraintViolation(WellbeingError):
    """A uniqueness or referential constraint rejected a write."""


class ValidationError(WellbeingError, ValueError):
    """Malformed input reached a repository."""


class DataIntegrityError(WellbeingError):
    """The store holds data that breaks a key invariant (e.g. duplicate keys)."""
