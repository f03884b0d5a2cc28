"""
Ledger services.

Append-only money events per friend. Balance is the sum of a friend's
entries and is recomputed on every read.
"""

from .exceptions import (
    TransactionNotFoundError,
    ImmutableChargeError,
    InvalidAmountError,
    MissingNoteError,
    EmptyUpdateError,
    OrderNotOwnedError,
)
from .balance import (
    balance_of,
    list_entries,
)
from .entries import (
    TransactionPatch,
    record_entry,
    record_payment,
    record_adjustment,
    update_entry,
    delete_entry,
)

__all__ = [
    # Exceptions
    'TransactionNotFoundError',
    'ImmutableChargeError',
    'InvalidAmountError',
    'MissingNoteError',
    'EmptyUpdateError',
    'OrderNotOwnedError',
    # Balance
    'balance_of',
    'list_entries',
    # Entries
    'TransactionPatch',
    'record_entry',
    'record_payment',
    'record_adjustment',
    'update_entry',
    'delete_entry',
]
