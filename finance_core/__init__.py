"""
Finance Core

A small personal finance system: a guarded in-memory ledger, background
auto-save tasks, a single-shot finance server and a transaction form.
"""

__version__ = "1.0.0"
