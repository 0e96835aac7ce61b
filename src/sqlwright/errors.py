"""Exception hierarchy for SQL Wright."""


class BuilderError(Exception):
    """Base exception for statement building failures."""

    pass


class UnsupportedOperationError(BuilderError):
    """Raised when the target dialect structurally lacks a capability."""

    pass


class ConditionError(BuilderError):
    """Raised when a condition cannot be compiled into SQL."""

    pass


class DialectError(BuilderError):
    """Raised when an unknown dialect is requested."""

    pass
