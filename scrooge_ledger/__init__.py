"""
Scrooge Ledger - Ledger Module

This module implements transaction validation against a UTXO pool and the
greedy, order-preserving acceptance of transaction batches.
"""

from .handler import TxHandler, validate_transaction, is_valid_tx

__all__ = ['TxHandler', 'validate_transaction', 'is_valid_tx']
