"""Domain-level exceptions.

Construction invariants and use-case failures are expressed as subclasses
of DomainException so the CLI layer can catch them uniformly and display
user-friendly messages.  The settlement engine itself reports business
rejections through return values and never raises these.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested product, customer or transaction does not exist."""
