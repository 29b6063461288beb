"""
Transaction Module

A transaction is a tagged record: the kind decides how the amount affects an
account (income credits, expense debits) and how it is reported.
"""

from decimal import Decimal
from dataclasses import dataclass
from enum import Enum

from .accounts import Account
from .amounts import ensure_amount, format_amount, parse_amount


class TransactionKind(Enum):
    """Kinds of personal finance transactions"""
    INCOME = "Income"
    EXPENSE = "Expense"


@dataclass(frozen=True)
class TransactionRecord:
    """
    Ephemeral transaction: built, applied to an account, then discarded
    """
    kind: TransactionKind
    amount: Decimal
    description: str

    def __post_init__(self):
        object.__setattr__(self, 'amount', ensure_amount(self.amount))

    @classmethod
    def income(cls, amount, description: str) -> 'TransactionRecord':
        return cls(TransactionKind.INCOME, amount, description)

    @classmethod
    def expense(cls, amount, description: str) -> 'TransactionRecord':
        return cls(TransactionKind.EXPENSE, amount, description)

    @classmethod
    def from_form(cls, kind: TransactionKind, amount_text: str, description: str) -> 'TransactionRecord':
        """
        Build a record from raw form input

        Raises:
            ValidationError: If amount_text is not a valid non-negative amount
        """
        return cls(kind, parse_amount(amount_text), description)

    def apply(self, account: Account) -> Decimal:
        """
        Apply this transaction to an account

        Returns:
            New account balance

        Raises:
            InsufficientFundsError: If an expense exceeds the balance
        """
        if self.kind == TransactionKind.INCOME:
            return account.credit(self.amount)
        elif self.kind == TransactionKind.EXPENSE:
            return account.debit(self.amount)
        raise ValueError(f"Unknown transaction kind: {self.kind}")

    def describe(self) -> str:
        """Human readable line for reports"""
        if self.kind == TransactionKind.INCOME:
            verb = "Income Added"
        elif self.kind == TransactionKind.EXPENSE:
            verb = "Expense Recorded"
        else:
            raise ValueError(f"Unknown transaction kind: {self.kind}")
        return f"{verb}: {format_amount(self.amount)} ({self.description})"
