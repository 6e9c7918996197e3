"""Errors raised by the pool ledger and its collaborators."""


class PoolError(RuntimeError):
    """Base class for every rejected pool operation."""


class InvalidAmountError(PoolError, ValueError):
    """Raised when an amount is zero, negative or not an integer."""


class NoStakeError(PoolError):
    """Raised when a reward is distributed while nothing is staked."""


class NoBalanceError(PoolError):
    """Raised when an account with no principal tries to withdraw."""


class UnauthorizedError(PoolError, PermissionError):
    """Raised when a caller other than the operator distributes a reward."""


class InvalidOperatorError(PoolError, ValueError):
    """Raised when the operator role is handed to an empty identity."""
