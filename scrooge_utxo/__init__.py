"""
Scrooge Ledger - UTXO Module

This module implements the UTXO (Unspent Transaction Output) reference type and
the pool that tracks which outputs are currently spendable.
"""

from .utxo import UTXO
from .pool import UTXOPool

__all__ = ['UTXO', 'UTXOPool']
