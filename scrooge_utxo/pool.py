"""
Implementation of the UTXOPool class for Scrooge Ledger.

The pool maps every currently spendable UTXO reference to the output it
refers to. It is a plain in-memory registry; callers own and mutate it.
"""

from typing import Dict, List, Optional, TYPE_CHECKING
from .utxo import UTXO

if TYPE_CHECKING:
    from scrooge_transaction.transaction import TransactionOutput


class UTXOPool:
    """
    In-memory registry of unspent transaction outputs.

    Attributes:
        _utxos (Dict[UTXO, TransactionOutput]): Maps references to outputs
    """

    def __init__(self, source: Optional['UTXOPool'] = None):
        """
        Initialize a pool, optionally as a copy of another pool.

        The copy is independent: adding or removing entries in either pool
        afterwards never affects the other.

        Args:
            source: Pool whose current contents are copied
        """
        self._utxos: Dict[UTXO, 'TransactionOutput'] = {}
        if source is not None:
            self._utxos.update(source._utxos)

    def copy(self) -> 'UTXOPool':
        """Return an independent snapshot of this pool."""
        return UTXOPool(self)

    def contains(self, utxo: UTXO) -> bool:
        """
        Check whether a reference is currently spendable.

        Args:
            utxo: Reference to look up

        Returns:
            bool: True if the pool holds an output for the reference
        """
        return utxo in self._utxos

    def get(self, utxo: UTXO) -> 'TransactionOutput':
        """
        Retrieve the output a reference points to.

        Args:
            utxo: Reference to look up; must be contained in the pool

        Returns:
            TransactionOutput stored under the reference

        Raises:
            ValueError: If the reference is not in the pool
        """
        output = self._utxos.get(utxo)
        if output is None:
            raise ValueError(f"UTXO {utxo!r} not found")
        return output

    def add(self, utxo: UTXO, output: 'TransactionOutput') -> None:
        """Insert or overwrite the output stored under a reference."""
        self._utxos[utxo] = output

    def remove(self, utxo: UTXO) -> None:
        """Remove a reference; removing an absent reference does nothing."""
        self._utxos.pop(utxo, None)

    def all_utxos(self) -> List[UTXO]:
        """
        Get every reference in the pool.

        Returns:
            List of references sorted by (tx_hash, index)
        """
        return sorted(self._utxos)

    def total_value(self) -> float:
        """
        Calculate the combined value of all outputs in the pool.

        Returns:
            Sum of output values
        """
        return sum(output.value for output in self._utxos.values())

    def __contains__(self, utxo: object) -> bool:
        return utxo in self._utxos

    def __len__(self) -> int:
        return len(self._utxos)

    def __repr__(self) -> str:
        return f"UTXOPool(size={len(self._utxos)})"
