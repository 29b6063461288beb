"""
Test suite for transactions module

Tests income/expense dispatch against an account and report formatting.
"""

import pytest
import dataclasses
from decimal import Decimal

from finance_core.accounts import Account, AccountRegistry
from finance_core.exceptions import InsufficientFundsError, ValidationError
from finance_core.transactions import TransactionKind, TransactionRecord


@pytest.fixture
def account():
    return Account("User1", Decimal('1000'), AccountRegistry())


class TestTransactionRecord:
    """Test record construction"""

    def test_income_constructor(self):
        record = TransactionRecord.income(500, "Salary")

        assert record.kind == TransactionKind.INCOME
        assert record.amount == Decimal('500')
        assert isinstance(record.amount, Decimal)
        assert record.description == "Salary"

    def test_expense_constructor(self):
        record = TransactionRecord.expense("200.00", "Groceries")

        assert record.kind == TransactionKind.EXPENSE
        assert record.amount == Decimal('200.00')

    def test_negative_amount_rejected(self):
        """Records never carry a negative amount"""
        with pytest.raises(ValidationError):
            TransactionRecord.income(Decimal('-1'), "Refund")

    def test_record_is_immutable(self):
        record = TransactionRecord.income(10, "Gift")
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.amount = Decimal('1000000')

    def test_from_form_parses_text(self):
        """Form text is parsed before the record exists"""
        record = TransactionRecord.from_form(TransactionKind.INCOME, "1,250.50", "Bonus")
        assert record.amount == Decimal('1250.50')

    def test_from_form_rejects_malformed_text(self):
        with pytest.raises(ValidationError):
            TransactionRecord.from_form(TransactionKind.EXPENSE, "lots", "Rent")

    def test_kind_values(self):
        """Kind values double as the persistence type label"""
        assert TransactionKind.INCOME.value == "Income"
        assert TransactionKind.EXPENSE.value == "Expense"


class TestApply:
    """Test applying records to an account"""

    def test_income_credits(self, account):
        balance = TransactionRecord.income(500, "Salary").apply(account)

        assert balance == Decimal('1500')
        assert account.current_balance() == Decimal('1500')

    def test_expense_debits(self, account):
        balance = TransactionRecord.expense(200, "Groceries").apply(account)

        assert balance == Decimal('800')

    def test_expense_insufficient_funds_propagates(self, account):
        """Overspending raises and leaves the balance intact"""
        with pytest.raises(InsufficientFundsError):
            TransactionRecord.expense(2000, "Holiday").apply(account)

        assert account.current_balance() == Decimal('1000')

    def test_example_scenario(self, account):
        """1000 -> income 500 -> expense 200 -> rejected expense 2000"""
        TransactionRecord.income(500, "Salary").apply(account)
        assert account.current_balance() == Decimal('1500')

        TransactionRecord.expense(200, "Groceries").apply(account)
        assert account.current_balance() == Decimal('1300')

        with pytest.raises(InsufficientFundsError):
            TransactionRecord.expense(2000, "Overspend").apply(account)
        assert account.current_balance() == Decimal('1300')
        assert account.account_count() == 1


class TestDescribe:
    """Test report lines"""

    def test_income_description(self):
        assert TransactionRecord.income(500, "Salary").describe() == "Income Added: 500.0 (Salary)"

    def test_expense_description(self):
        assert TransactionRecord.expense(200, "Groceries").describe() == "Expense Recorded: 200.0 (Groceries)"

    def test_fractional_amount(self):
        assert TransactionRecord.income(Decimal('12.50'), "Tips").describe() == "Income Added: 12.5 (Tips)"

    def test_describe_has_no_side_effects(self, account):
        record = TransactionRecord.expense(100, "Books")
        record.describe()

        assert account.current_balance() == Decimal('1000')
