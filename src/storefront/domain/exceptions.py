"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An argument is malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InsufficientStockError(DomainException):
    """A stock adjustment would drive a product's stock below zero."""


class EmptyCartError(DomainException):
    """Checkout was attempted on a cart with no line items."""


class ForbiddenError(DomainException):
    """The caller is not allowed to act on the requested entity."""


class InvalidStateError(DomainException):
    """The requested status transition is not allowed."""


class UnauthenticatedError(DomainException):
    """No valid caller identity was supplied."""
