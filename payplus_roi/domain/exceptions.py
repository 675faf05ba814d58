"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class UnknownCurrency(DomainException):
    """Currency code is not in the configured rate or symbol table"""

    pass


class MalformedSnapshot(DomainException):
    """Imported snapshot is missing required fields or holds non-numeric values"""

    pass


class UnknownField(DomainException):
    """Field path is not one of the settable fields"""

    pass


class UnknownProvider(DomainException):
    """Fee schedule provider is neither tungsten nor currentProvider"""

    pass
