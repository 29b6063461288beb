"""
Account Ledger Module

Owns a single account's balance and its mutation rules. Every balance change
goes through credit() or debit(), and the debit check-then-act sequence runs
under the account lock so concurrent callers can never overdraw the account.
"""

from decimal import Decimal
from typing import Union
import threading

from .amounts import ensure_amount, format_amount, MAX_BALANCE
from .exceptions import InsufficientFundsError, ValidationError
from .logging_config import get_logger, log_action


class AccountRegistry:
    """
    Process-scoped count of constructed accounts

    The orchestrator owns one registry and passes it to every Account it
    creates. The count only grows.
    """

    def __init__(self):
        self._count = 0
        self._lock = threading.Lock()

    def register(self, account: 'Account') -> int:
        """Record a newly constructed account and return the new total"""
        with self._lock:
            self._count += 1
            return self._count

    def account_count(self) -> int:
        """Number of accounts constructed against this registry"""
        with self._lock:
            return self._count


class Account:
    """
    In-memory account ledger

    Balance is never negative: a debit larger than the balance raises
    InsufficientFundsError and leaves the balance untouched.
    """

    def __init__(
        self,
        owner_label: str,
        initial_balance: Union[Decimal, int, str],
        registry: AccountRegistry
    ):
        if not owner_label:
            raise ValidationError("Owner label must be a non-empty string")

        self._owner_label = owner_label
        self._balance = ensure_amount(initial_balance)
        self._lock = threading.RLock()
        self._registry = registry
        self.logger = get_logger("finance.accounts")

        total = registry.register(self)
        log_action(
            self.logger, "info",
            f"Account opened for {owner_label} with balance {format_amount(self._balance)}",
            action="account.open", resource=owner_label,
            extra={"total_accounts": total}
        )

    @property
    def owner_label(self) -> str:
        return self._owner_label

    @property
    def registry(self) -> AccountRegistry:
        return self._registry

    @property
    def balance(self) -> Decimal:
        return self.current_balance()

    def current_balance(self) -> Decimal:
        """Get the current balance"""
        with self._lock:
            return self._balance

    def account_count(self) -> int:
        """Total accounts constructed in this account's registry"""
        return self._registry.account_count()

    def credit(self, amount: Union[Decimal, int, str]) -> Decimal:
        """
        Add amount to the balance

        Args:
            amount: Non-negative amount

        Returns:
            New balance

        Raises:
            ValidationError: If amount is negative, not a number, or would
                push the balance past MAX_BALANCE
        """
        amount = ensure_amount(amount)
        with self._lock:
            if self._balance + amount > MAX_BALANCE:
                raise ValidationError(f"Credit would exceed the maximum balance of {format_amount(MAX_BALANCE)}")
            self._balance += amount
            new_balance = self._balance

        self.logger.debug("Credited %s to %s, balance %s", amount, self._owner_label, new_balance)
        return new_balance

    def debit(self, amount: Union[Decimal, int, str]) -> Decimal:
        """
        Subtract amount from the balance if funds allow

        Args:
            amount: Non-negative amount

        Returns:
            New balance

        Raises:
            ValidationError: If amount is negative or not a number
            InsufficientFundsError: If amount exceeds the current balance
        """
        amount = ensure_amount(amount)
        with self._lock:
            if amount > self._balance:
                available = self._balance
                raise InsufficientFundsError(requested=amount, available=available)
            self._balance -= amount
            new_balance = self._balance

        self.logger.debug("Debited %s from %s, balance %s", amount, self._owner_label, new_balance)
        return new_balance

    def __repr__(self) -> str:
        return f"Account(owner_label={self._owner_label!r}, balance={self.current_balance()})"
