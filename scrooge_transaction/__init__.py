"""
Scrooge Ledger - Transaction Module

This module implements the transaction record, its signing payloads, and the
ECDSA helpers used to sign and verify inputs.
"""

from .transaction import Transaction, TransactionInput, TransactionOutput, TransactionBuilder
from .crypto import generate_keypair, sign_message, verify_signature

__all__ = [
    'Transaction',
    'TransactionInput',
    'TransactionOutput',
    'TransactionBuilder',
    'generate_keypair',
    'sign_message',
    'verify_signature'
]
