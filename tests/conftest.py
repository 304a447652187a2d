"""
공유 fixture: toy 곡선 SRS (빠른 대수/확률 검사)와 bn128 SRS (실제 페어링).
"""

import pytest

from kzg10.field import BN128, ToyCurve
from kzg10.srs import SRS


@pytest.fixture(scope="session")
def toy():
    """Toy pairing simulator over the prime field of order 101."""
    return ToyCurve(101)


@pytest.fixture(scope="session")
def toy_field(toy):
    return toy.scalar_field


@pytest.fixture(scope="session")
def toy_srs(toy):
    """Toy SRS with max_degree=3."""
    return SRS.generate_deterministic(max_degree=3, seed=7, curve=toy)


@pytest.fixture(scope="session")
def toy_srs_large(toy):
    """Toy SRS with max_degree=8."""
    return SRS.generate_deterministic(max_degree=8, seed=1234, curve=toy)


@pytest.fixture(scope="session")
def srs_small():
    """Small bn128 SRS for real-pairing tests (max_degree=4)."""
    return SRS.generate_deterministic(max_degree=4, seed=42, curve=BN128)
