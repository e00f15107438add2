"""Domain-level exceptions.

All ledger errors are expressed as subclasses of DomainException so the
CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class LedgerUnavailable(DomainException):
    """The backing store could not be read or written."""


class ConcurrentModification(DomainException):
    """A record changed between read and write (stale version)."""

    def __init__(self, product_id: str, expected: int, actual: int | None) -> None:
        super().__init__(
            f"Inventory for product '{product_id}' was modified concurrently "
            f"(expected version {expected}, found {actual})"
        )
        self.product_id = product_id
        self.expected = expected
        self.actual = actual
