"""
Transaction Sink Module

Out-of-process persistence is represented by a sink interface. The default
implementation only logs what would be written; it always succeeds.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
import logging

from .amounts import format_amount
from .logging_config import get_logger, log_action


class TransactionSink(ABC):
    """Abstract interface for recording completed transactions"""
    
    @abstractmethod
    def record(self, kind: str, amount: Decimal, description: str) -> bool:
        """Record a completed transaction; True on success"""
        pass


class LoggingTransactionSink(TransactionSink):
    """Sink that writes each transaction to the log instead of a database"""
    
    def __init__(self, logger_name: str = "finance.persistence"):
        self.logger = get_logger(logger_name)
    
    def record(self, kind: str, amount: Decimal, description: str) -> bool:
        log_action(
            self.logger, "info",
            f"Transaction [{kind}] added: {format_amount(amount)} ({description})",
            action="transaction.record", resource=kind,
            extra={"amount": str(amount), "description": description}
        )
        return True


def record_transaction(sink: TransactionSink, kind: str, amount: Decimal,
                       description: str, logger: logging.Logger) -> bool:
    """
    Hand an applied transaction to the sink
    
    The ledger change already stands, so an unconfirmed record is logged as
    a warning rather than raised.
    """
    recorded = sink.record(kind, amount, description)
    if not recorded:
        log_action(
            logger, "warning",
            f"Sink did not confirm {kind} of {format_amount(amount)} ({description})",
            action="transaction.unconfirmed", resource=kind
        )
    return recorded
