"""
Transaction Form Module

Boundary between user-entered form data and the ledger. Raw amount text is
validated before a transaction is built; validation and insufficient funds
failures come back as messages, never as exceptions.
"""

from decimal import Decimal
from dataclasses import dataclass

from .accounts import Account
from .amounts import format_amount
from .exceptions import FinanceError
from .logging_config import get_logger, log_action
from .persistence import TransactionSink, record_transaction
from .transactions import TransactionKind, TransactionRecord


@dataclass(frozen=True)
class FormResult:
    """Outcome of a form submission as shown to the user"""
    ok: bool
    kind: TransactionKind
    message: str
    balance: Decimal


class FormHandler:
    """Applies form submissions to an account and records them"""

    def __init__(self, account: Account, sink: TransactionSink):
        self.account = account
        self.sink = sink
        self.logger = get_logger("finance.forms")

    def submit(self, kind: TransactionKind, amount_text: str, description: str) -> FormResult:
        """
        Validate and apply one form submission

        Args:
            kind: Income or expense
            amount_text: Amount exactly as typed
            description: Free text label

        Returns:
            FormResult with the message to display and the resulting balance
        """
        try:
            record = TransactionRecord.from_form(kind, amount_text, description)
            balance = record.apply(self.account)
        except FinanceError as e:
            log_action(
                self.logger, "warning", f"{kind.value} submission rejected: {e}",
                action="form.rejected", resource=kind.value,
                extra={"amount_text": amount_text, "description": description}
            )
            return FormResult(
                ok=False,
                kind=kind,
                message=f"Error: {e}",
                balance=self.account.current_balance()
            )

        record_transaction(self.sink, kind.value, record.amount, record.description, self.logger)

        if kind == TransactionKind.INCOME:
            label = "Income Added"
        else:
            label = "Expense Added"

        return FormResult(
            ok=True,
            kind=kind,
            message=f"{label}: {format_amount(record.amount)}",
            balance=balance
        )

    def submit_income(self, amount_text: str, description: str) -> FormResult:
        return self.submit(TransactionKind.INCOME, amount_text, description)

    def submit_expense(self, amount_text: str, description: str) -> FormResult:
        return self.submit(TransactionKind.EXPENSE, amount_text, description)
