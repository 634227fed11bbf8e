"""
Implementation of the TxHandler class for Scrooge Ledger.

The handler owns a UTXO pool, validates proposed transactions against it and
applies an unordered batch of candidates greedily, in the order given.
"""

import logging
import math
from typing import Callable, Iterable, List, Optional, Set, Tuple

from scrooge_utxo.pool import UTXOPool
from scrooge_utxo.utxo import UTXO
from scrooge_transaction.crypto import verify_signature
from scrooge_transaction.transaction import Transaction

logger = logging.getLogger(__name__)

Verifier = Callable[[str, bytes, bytes], bool]


def _is_finite(value: float) -> bool:
    # Integers are exact; math.isfinite would overflow on very large ones
    return isinstance(value, int) or math.isfinite(value)


def validate_transaction(
    tx: Transaction,
    pool: UTXOPool,
    verifier: Verifier = verify_signature
) -> Tuple[bool, Optional[str]]:
    """
    Check a transaction against a pool snapshot without mutating it.

    A transaction is valid when:
      (1) every output its inputs claim is in the pool,
      (2) every input's signature verifies under the claimed output's address,
      (3) no output is claimed more than once,
      (4) every output value it creates is finite and non-negative, and
      (5) the claimed values are finite and sum to at least the created values.

    Args:
        tx: Transaction to validate
        pool: Pool the claims are checked against
        verifier: Signature check taking (address, message, signature)

    Returns:
        Tuple of (is_valid: bool, error_message: Optional[str])
    """
    claimed: List[UTXO] = [tx_input.utxo() for tx_input in tx.inputs]

    for utxo in claimed:
        if not pool.contains(utxo):
            return False, f"Claimed output {utxo!r} not in pool"

    for i, (tx_input, utxo) in enumerate(zip(tx.inputs, claimed)):
        address = pool.get(utxo).address
        if tx_input.signature is None:
            return False, f"Input {i} is not signed"
        if not verifier(address, tx.get_raw_data_to_sign(i), tx_input.signature):
            return False, f"Invalid signature on input {i}"

    seen: Set[UTXO] = set()
    for utxo in claimed:
        if utxo in seen:
            return False, f"Output {utxo!r} claimed more than once"
        seen.add(utxo)

    for i, output in enumerate(tx.outputs):
        if not _is_finite(output.value):
            return False, f"Output {i} has non-finite value"
        if not output.value >= 0:
            return False, f"Output {i} has negative value"

    # The pool may hold values that never passed validation
    claimed_values = [pool.get(utxo).value for utxo in claimed]
    if not all(_is_finite(value) for value in claimed_values):
        return False, "Claimed output has non-finite value"

    input_sum = sum(claimed_values)
    output_sum = sum(output.value for output in tx.outputs)
    if not input_sum >= output_sum:
        return False, "Output value exceeds input value"

    return True, None


def is_valid_tx(
    tx: Transaction,
    pool: UTXOPool,
    verifier: Verifier = verify_signature
) -> bool:
    """Boolean form of validate_transaction()."""
    valid, _ = validate_transaction(tx, pool, verifier)
    return valid


class TxHandler:
    """
    Validates transactions and applies batches of them to a UTXO pool.

    The handler works on its own copy of the pool passed in, so the caller's
    pool is never modified.

    Attributes:
        verifier (Callable): Signature check taking (address, message, signature)
    """

    def __init__(self, utxo_pool: UTXOPool, verifier: Verifier = verify_signature):
        """
        Initialize handler.

        Args:
            utxo_pool: Initial pool; copied, not shared
            verifier: Signature check, ECDSA over SECP256k1 by default
        """
        self._pool = UTXOPool(utxo_pool)
        self.verifier = verifier

    @property
    def utxo_pool(self) -> UTXOPool:
        """Snapshot of the current pool."""
        return self._pool.copy()

    def validate_tx(self, tx: Transaction) -> Tuple[bool, Optional[str]]:
        """Validate ``tx`` against the current pool, reporting the failed rule."""
        return validate_transaction(tx, self._pool, self.verifier)

    def is_valid_tx(self, tx: Transaction) -> bool:
        """Return True if ``tx`` is valid against the current pool."""
        return is_valid_tx(tx, self._pool, self.verifier)

    def handle_txs(self, possible_txs: Iterable[Transaction]) -> List[Transaction]:
        """
        Process one epoch of proposed transactions.

        Candidates are checked in the order given, each against the pool as
        updated by the candidates accepted before it. A valid candidate's
        claimed outputs are removed and its own outputs added; an invalid one
        is skipped without touching the pool. A candidate that spends an
        output created by a later candidate is rejected.

        Args:
            possible_txs: Proposed transactions, in processing order

        Returns:
            Accepted transactions in the order they were accepted
        """
        accepted: List[Transaction] = []
        considered = 0

        for tx in possible_txs:
            considered += 1
            if not self.is_valid_tx(tx):
                continue

            accepted.append(tx)
            self._apply(tx)
            logger.debug("Accepted %r", tx)

        logger.debug(
            "Accepted %d of %d transactions; pool holds %d outputs",
            len(accepted), considered, len(self._pool)
        )
        return accepted

    def _apply(self, tx: Transaction) -> None:
        for tx_input in tx.inputs:
            self._pool.remove(tx_input.utxo())

        for index, output in enumerate(tx.outputs):
            self._pool.add(UTXO(tx.tx_hash, index), output)
