"""
Implementation of the Transaction record for Scrooge Ledger.

A transaction consumes previously created outputs through its inputs and
creates new outputs. Each input carries a signature over a payload that
depends on that input's position, so inputs are signed independently.
"""

from dataclasses import dataclass
from typing import List, Dict, Any, Optional, Sequence
import hashlib
import struct

from ecdsa import SigningKey
from scrooge_utxo.utxo import UTXO
from .crypto import sign_message


@dataclass(frozen=True)
class TransactionInput:
    """
    Represents an input to a transaction (a claim on a previous output).

    Attributes:
        prev_tx_hash (str): Hash of the transaction whose output is claimed
        output_index (int): Position of the claimed output in that transaction
        signature (Optional[bytes]): Signature over the input's signing payload
    """
    prev_tx_hash: str
    output_index: int
    signature: Optional[bytes] = None

    def utxo(self) -> UTXO:
        """Return the reference this input claims."""
        return UTXO(self.prev_tx_hash, self.output_index)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "prev_tx_hash": self.prev_tx_hash,
            "output_index": self.output_index,
            "signature": self.signature.hex() if self.signature is not None else None
        }


@dataclass(frozen=True)
class TransactionOutput:
    """
    Represents an output created by a transaction.

    Negative values are representable; rejecting them is the validator's job.

    Attributes:
        value (float): Amount of coins
        address (str): Hex-encoded public key allowed to spend this output
    """
    value: float
    address: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"value": self.value, "address": self.address}


def _field(data: bytes) -> bytes:
    return struct.pack(">I", len(data)) + data


def _value_bytes(value: float) -> bytes:
    """
    Encode an output value without loss.

    Integers are written as tagged decimal text so values above 2**53 stay
    exact; floats are written as tagged 8-byte doubles.

    Raises:
        ValueError: If value is neither an int nor a float
    """
    if isinstance(value, int):
        return b"i" + _field(str(value).encode("ascii"))
    if isinstance(value, float):
        return b"f" + struct.pack(">d", value)
    raise ValueError(f"Unsupported output value type: {type(value).__name__}")


def _output_bytes(output: TransactionOutput) -> bytes:
    return _value_bytes(output.value) + _field(output.address.encode("utf-8"))


def _outputs_bytes(outputs: Sequence[TransactionOutput]) -> bytes:
    return struct.pack(">I", len(outputs)) + b"".join(_output_bytes(out) for out in outputs)


class Transaction:
    """
    Immutable transaction record.

    Attributes:
        inputs (Tuple[TransactionInput, ...]): Claims on previous outputs, in order
        outputs (Tuple[TransactionOutput, ...]): New outputs, in order
        tx_hash (str): SHA-256 hex digest of the raw transaction
    """

    def __init__(
        self,
        inputs: Sequence[TransactionInput],
        outputs: Sequence[TransactionOutput]
    ):
        """
        Initialize a transaction and compute its hash.

        Transactions without inputs are allowed; they are how coins enter an
        initial pool.

        Args:
            inputs: Ordered inputs
            outputs: Ordered outputs
        """
        self.inputs = tuple(inputs)
        self.outputs = tuple(outputs)
        self.tx_hash = self.compute_hash()

    def compute_hash(self) -> str:
        """
        Compute the transaction hash as SHA-256 of get_raw_tx().

        Returns:
            str: Hex-encoded transaction hash
        """
        return hashlib.sha256(self.get_raw_tx()).hexdigest()

    def get_raw_data_to_sign(self, index: int) -> bytes:
        """
        Build the exact payload the input at ``index`` must sign:
          prev_tx_hash | output_index | output count | (value | address) per output

        Variable-length fields carry a 4-byte length prefix, so distinct
        transactions never share a payload.

        Args:
            index: Input position

        Returns:
            bytes: Signing payload for that input

        Raises:
            ValueError: If index does not name an input
        """
        if not 0 <= index < len(self.inputs):
            raise ValueError(f"Input index {index} out of range")

        tx_input = self.inputs[index]
        return b"".join([
            _field(bytes.fromhex(tx_input.prev_tx_hash)),
            struct.pack(">i", tx_input.output_index),
            _outputs_bytes(self.outputs)
        ])

    def get_raw_tx(self) -> bytes:
        """Serialize every input (with signature) and output to bytes."""
        parts: List[bytes] = [struct.pack(">I", len(self.inputs))]
        for tx_input in self.inputs:
            parts.append(_field(bytes.fromhex(tx_input.prev_tx_hash)))
            parts.append(struct.pack(">i", tx_input.output_index))
            parts.append(_field(tx_input.signature or b""))
        parts.append(_outputs_bytes(self.outputs))
        return b"".join(parts)

    def num_inputs(self) -> int:
        return len(self.inputs)

    def num_outputs(self) -> int:
        return len(self.outputs)

    def get_input(self, index: int) -> TransactionInput:
        return self.inputs[index]

    def get_output(self, index: int) -> TransactionOutput:
        return self.outputs[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.tx_hash == other.tx_hash

    def __hash__(self) -> int:
        return hash(self.tx_hash)

    def __repr__(self) -> str:
        return (
            f"Transaction(tx_hash={self.tx_hash[:16]}, "
            f"inputs={len(self.inputs)}, outputs={len(self.outputs)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert transaction to dictionary for serialization."""
        return {
            "tx_hash": self.tx_hash,
            "inputs": [inp.to_dict() for inp in self.inputs],
            "outputs": [out.to_dict() for out in self.outputs]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Transaction':
        """
        Create transaction from dictionary representation.

        Args:
            data: Dictionary with transaction data

        Returns:
            New Transaction instance

        Raises:
            ValueError: If data is invalid or the hash does not match
        """
        try:
            inputs = [
                TransactionInput(
                    prev_tx_hash=inp["prev_tx_hash"],
                    output_index=int(inp["output_index"]),
                    signature=bytes.fromhex(inp["signature"]) if inp.get("signature") else None
                )
                for inp in data["inputs"]
            ]
            outputs = [
                TransactionOutput(value=out["value"], address=out["address"])
                for out in data["outputs"]
            ]
            tx = cls(inputs=inputs, outputs=outputs)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Error deserializing transaction: {str(e)}")

        if "tx_hash" in data and tx.tx_hash != data["tx_hash"]:
            raise ValueError("Transaction hash mismatch")
        return tx


class TransactionBuilder:
    """
    Accumulates inputs and outputs, signs inputs, and produces a Transaction.

    Signing payloads only cover input references and outputs, so inputs can be
    signed in any order once every output has been added.
    """

    def __init__(self):
        self._inputs: List[TransactionInput] = []
        self._outputs: List[TransactionOutput] = []

    def add_input(self, prev_tx_hash: str, output_index: int) -> 'TransactionBuilder':
        self._inputs.append(TransactionInput(prev_tx_hash, output_index))
        return self

    def add_output(self, value: float, address: str) -> 'TransactionBuilder':
        self._outputs.append(TransactionOutput(value, address))
        return self

    def add_signature(self, index: int, signature: bytes) -> 'TransactionBuilder':
        """
        Attach a precomputed signature to an input.

        Raises:
            ValueError: If index does not name an input
        """
        if not 0 <= index < len(self._inputs):
            raise ValueError(f"Input index {index} out of range")
        current = self._inputs[index]
        self._inputs[index] = TransactionInput(current.prev_tx_hash, current.output_index, signature)
        return self

    def sign_input(self, index: int, signing_key: SigningKey) -> 'TransactionBuilder':
        """
        Sign the input at ``index`` with ``signing_key``.

        Raises:
            ValueError: If index does not name an input
        """
        payload = Transaction(self._inputs, self._outputs).get_raw_data_to_sign(index)
        return self.add_signature(index, sign_message(signing_key, payload))

    def build(self) -> Transaction:
        return Transaction(self._inputs, self._outputs)
