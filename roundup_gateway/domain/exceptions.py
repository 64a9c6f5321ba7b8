"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidAmountError(DomainException):
    """Monetary amount is zero or negative"""

    pass


class DependencyUnavailableError(DomainException):
    """Text-generation service could not produce a response"""

    pass
