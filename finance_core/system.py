"""
Finance System Module

Wires the account, transactions, auto-save tasks and the finance server
together and runs the demo flow. Background work is started and left
running; nothing here waits on it.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .accounts import Account, AccountRegistry
from .amounts import format_amount
from .autosave import AutoSaveTask, start_autosave_tasks
from .config import FinanceConfig, get_config
from .exceptions import InsufficientFundsError
from .forms import FormHandler
from .listener import BoundedListener
from .logging_config import get_logger, log_action
from .persistence import LoggingTransactionSink, TransactionSink, record_transaction
from .repository import Repository
from .transactions import TransactionRecord


@dataclass
class DemoRun:
    """Handles to everything the demo started"""
    account: Account
    autosave_tasks: List[AutoSaveTask]
    listener: BoundedListener
    reports: List[str] = field(default_factory=list)
    overspend_error: Optional[InsufficientFundsError] = None


class FinanceSystem:
    """Finance system with all components initialized"""

    def __init__(
        self,
        config: Optional[FinanceConfig] = None,
        sink: Optional[TransactionSink] = None,
        registry: Optional[AccountRegistry] = None,
        daemon_threads: bool = False
    ):
        self.config = config or get_config()
        self.registry = registry or AccountRegistry()
        self.sink = sink or LoggingTransactionSink()
        self.daemon_threads = daemon_threads
        self.logger = get_logger("finance.system")

        self.account = Account(
            owner_label=self.config.owner_label,
            initial_balance=self.config.initial_balance,
            registry=self.registry
        )
        self.form_handler = FormHandler(self.account, self.sink)
        self.reports: Repository[str] = Repository()

    def process(self, record: TransactionRecord):
        """
        Apply a transaction, report it and hand it to the sink

        Raises:
            InsufficientFundsError: If an expense exceeds the balance
        """
        balance = record.apply(self.account)
        self.logger.info(record.describe())
        record_transaction(self.sink, record.kind.value, record.amount, record.description, self.logger)
        return balance

    def create_listener(self) -> BoundedListener:
        return BoundedListener(
            host=self.config.listener_host,
            port=self.config.listener_port,
            deadline=self.config.listener_timeout_seconds,
            greeting=self.config.listener_greeting,
            daemon=self.daemon_threads
        )

    def start_autosaves(self) -> List[AutoSaveTask]:
        return start_autosave_tasks(
            self.config.autosave_task_count,
            delay_seconds=self.config.autosave_delay_seconds,
            daemon=self.daemon_threads
        )

    def run_demo(self) -> DemoRun:
        """
        Run the demo flow

        Applies a salary and a grocery expense, starts the auto-save tasks,
        attempts an overspend, then launches the finance server. Returns
        without waiting for any background work.
        """
        self.process(TransactionRecord.income(500, "Salary"))
        self.process(TransactionRecord.expense(200, "Groceries"))

        log_action(
            self.logger, "info",
            f"Final Balance: {format_amount(self.account.current_balance())}",
            action="account.balance", resource=self.account.owner_label
        )
        self.logger.info(f"Total Accounts: {self.registry.account_count()}")

        self.reports.add("Finance Report 1")
        self.reports.add("Finance Report 2")
        self.logger.info(f"Repository items: {self.reports.get_all()}")

        tasks = self.start_autosaves()

        overspend_error = None
        self.logger.info("Trying to overspend...")
        try:
            self.process(TransactionRecord.expense(2000, "Overspend"))
        except InsufficientFundsError as e:
            overspend_error = e
            self.logger.warning(f"Transaction failed: {e}")

        listener = self.create_listener()
        listener.launch()

        return DemoRun(
            account=self.account,
            autosave_tasks=tasks,
            listener=listener,
            reports=self.reports.get_all(),
            overspend_error=overspend_error
        )
