"""Shared expense balances and settlement."""

from .settlement import (
    Balance,
    Expense,
    Participant,
    Transfer,
    compute_balances,
    simplify_debts,
    total_expenses,
)
from .summary import describe_transfer, summarize

__all__ = [
    "Balance",
    "Expense",
    "Participant",
    "Transfer",
    "compute_balances",
    "simplify_debts",
    "total_expenses",
    "describe_transfer",
    "summarize",
]
