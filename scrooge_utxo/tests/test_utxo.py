"""
Tests for the UTXO reference class.
"""

import dataclasses
import pytest
from scrooge_utxo.utxo import UTXO

HASH_A = "aa" * 32
HASH_B = "bb" * 32

def test_utxo_equality():
    """Test that references compare by both fields."""
    assert UTXO(HASH_A, 0) == UTXO(HASH_A, 0)
    assert UTXO(HASH_A, 0) != UTXO(HASH_A, 1)
    assert UTXO(HASH_A, 0) != UTXO(HASH_B, 0)
    assert UTXO(HASH_A, 0) != (HASH_A, 0)

def test_utxo_as_dict_key():
    """Test that equal references hash to the same key."""
    mapping = {UTXO(HASH_A, 3): "output"}
    assert mapping[UTXO(HASH_A, 3)] == "output"
    assert UTXO(HASH_A, 4) not in mapping

    assert len({UTXO(HASH_A, 0), UTXO(HASH_A, 0), UTXO(HASH_B, 0)}) == 2

def test_utxo_is_immutable():
    """Test that fields cannot be reassigned."""
    utxo = UTXO(HASH_A, 0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        utxo.index = 1

def test_utxo_ordering():
    """Test ordering by hash, then index."""
    refs = [UTXO(HASH_B, 0), UTXO(HASH_A, 2), UTXO(HASH_A, 1)]
    assert sorted(refs) == [UTXO(HASH_A, 1), UTXO(HASH_A, 2), UTXO(HASH_B, 0)]

def test_utxo_serialization():
    """Test dictionary form and repr."""
    utxo = UTXO(HASH_A, 7)
    assert utxo.to_dict() == {"tx_hash": HASH_A, "index": 7}
    assert "index=7" in repr(utxo)
