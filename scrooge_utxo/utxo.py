"""
Implementation of the UTXO reference class for Scrooge Ledger.

A UTXO reference names one output of one transaction: the hash of the
transaction that produced it and the output's position within it.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any


@dataclass(frozen=True, order=True)
class UTXO:
    """
    Reference to an unspent transaction output.

    Instances are immutable and compare by value over both fields, so they can
    be used as dictionary keys in a UTXOPool and sorted deterministically.

    Attributes:
        tx_hash (str): Hex-encoded hash of the transaction that created the output
        index (int): Position of the output within that transaction
    """
    tx_hash: str
    index: int

    def __repr__(self) -> str:
        """Return string representation of the reference."""
        return f"UTXO(tx_hash={self.tx_hash[:16]}, index={self.index})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)
