"""Base exception classes for Ambitype."""


class AmbitypeException(Exception):
    """Base exception for all Ambitype errors.

    All custom exceptions in the ambitype package should inherit
    from this base class for consistent error handling.
    """

    pass
