"""
Finance error taxonomy.

Input errors (validation, insufficient funds) are always recoverable at the
call boundary. Resource errors (bind failure) end only the owning thread.
"""


class FinanceError(Exception):
    """Base class for all finance core errors"""


class InsufficientFundsError(FinanceError):
    """Debit amount exceeds the current balance"""

    def __init__(self, message: str = "Not enough funds available.", requested=None, available=None):
        super().__init__(message)
        self.requested = requested
        self.available = available


class ValidationError(FinanceError, ValueError):
    """Malformed or out-of-range input amount"""


class BindError(FinanceError, OSError):
    """Listener could not acquire its port"""

    def __init__(self, host: str, port: int, reason: str):
        super().__init__(f"Cannot bind {host}:{port}: {reason}")
        self.host = host
        self.port = port
        self.reason = reason
