"""
Shared fixtures for Scrooge Ledger tests.
"""

import pytest
from scrooge_transaction.crypto import generate_keypair


@pytest.fixture
def alice():
    """Signing key and address for the first test owner."""
    return generate_keypair()


@pytest.fixture
def bob():
    """Signing key and address for the second test owner."""
    return generate_keypair()


@pytest.fixture
def carol():
    """Signing key and address for the third test owner."""
    return generate_keypair()
