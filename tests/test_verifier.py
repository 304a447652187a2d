"""
Tests for kzg10.verifier.verify_opening.

Covers:
- correctness for every point of the toy field
- every wrong value is rejected (toy field, exhaustive)
- wrong point / proof / commitment rejected
- malformed inputs raise instead of returning False
- bn128 pairing check
"""

import pytest

from kzg10.errors import KZGError, MalformedInput
from kzg10.field import BN128, FR, G1, ToyPoint
from kzg10.kzg import commit, create_opening
from kzg10.polynomial import Polynomial
from kzg10.verifier import as_verification_key, verify_opening


@pytest.fixture(scope="module")
def toy_opening(toy_field, toy_srs):
    """(C, z, y, π) for p(x) = 3x² + 2x + 1 at z = 5."""
    p = Polynomial([1, 2, 3], toy_field)
    value, proof = create_opening(p, 5, toy_srs)
    return commit(p, toy_srs), 5, value, proof


@pytest.fixture(scope="module")
def bn_opening(srs_small):
    p = Polynomial([3, 1, 4, 1, 5])
    value, proof = create_opening(p, 9, srs_small)
    return commit(p, srs_small), 9, value, proof


# ─────────────────────────────────────────────────────────────────────
# Toy curve
# ─────────────────────────────────────────────────────────────────────

class TestVerifyToy:
    """toy 곡선 위 검증 테스트."""

    def test_every_point_verifies(self, toy_field, toy_srs):
        """Honest openings verify at all 101 points."""
        p = Polynomial([7, 0, 13, 99], toy_field)
        C = commit(p, toy_srs)
        vk = toy_srs.verification_key
        for z in range(101):
            value, proof = create_opening(p, z, toy_srs)
            assert verify_opening(C, proof, z, value, vk), f"z={z}"

    def test_every_wrong_value_rejected(self, toy_field, toy_srs, toy_opening):
        """Each of the 100 wrong values fails against an honest proof."""
        C, z, value, proof = toy_opening
        vk = toy_srs.verification_key
        for v in range(101):
            if toy_field(v) == value:
                continue
            assert not verify_opening(C, proof, z, v, vk), f"v={v}"

    def test_wrong_point_rejected(self, toy_srs, toy_opening):
        C, z, value, proof = toy_opening
        assert not verify_opening(C, proof, z + 1, value, toy_srs)

    def test_proof_for_other_polynomial_rejected(self, toy_field, toy_srs, toy_opening):
        C, z, value, _ = toy_opening
        other = Polynomial([1, 2, 3, 1], toy_field)
        _, proof = create_opening(other, z, toy_srs)
        assert not verify_opening(C, proof, z, value, toy_srs)

    def test_shifted_proof_rejected(self, toy, toy_srs, toy_opening):
        C, z, value, proof = toy_opening
        forged = toy.add(proof, toy.G1)
        assert not verify_opening(C, forged, z, value, toy_srs)

    def test_accepts_srs_or_verification_key(self, toy_srs, toy_opening):
        assert verify_opening(*toy_opening, toy_srs) == verify_opening(
            *toy_opening, toy_srs.verification_key)

    def test_value_as_field_element(self, toy_field, toy_srs, toy_opening):
        C, z, value, proof = toy_opening
        assert verify_opening(C, proof, toy_field(z), toy_field(int(value)), toy_srs)


class TestMalformed:
    """잘못된 입력은 False가 아니라 MalformedInput."""

    def test_commitment_not_in_g1(self, toy, toy_srs, toy_opening):
        _, z, value, proof = toy_opening
        with pytest.raises(MalformedInput):
            verify_opening(toy.G2, proof, z, value, toy_srs)

    def test_proof_not_in_g1(self, toy_srs, toy_opening):
        C, z, value, _ = toy_opening
        with pytest.raises(MalformedInput):
            verify_opening(C, None, z, value, toy_srs)

    def test_point_from_other_curve(self, toy_srs, toy_opening):
        C, _, value, proof = toy_opening
        with pytest.raises(MalformedInput):
            verify_opening(C, proof, ToyPoint("G1", 5, 103), value, toy_srs)

    def test_value_from_other_field(self, toy_srs, toy_opening):
        C, z, _, proof = toy_opening
        with pytest.raises(MalformedInput):
            verify_opening(C, proof, z, FR(86), toy_srs)

    @pytest.mark.parametrize("value", ["86", 86.0, True])
    def test_value_wrong_type(self, toy_srs, toy_opening, value):
        C, z, _, proof = toy_opening
        with pytest.raises(MalformedInput):
            verify_opening(C, proof, z, value, toy_srs)

    def test_not_a_verification_key(self, toy_opening):
        with pytest.raises(MalformedInput):
            verify_opening(*toy_opening, "vk")

    def test_bn128_commitment_off_curve(self, srs_small, bn_opening):
        _, z, value, proof = bn_opening
        with pytest.raises(MalformedInput):
            verify_opening((G1[0], G1[0]), proof, z, value, srs_small)

    def test_errors_are_kzg_errors(self, toy_srs, toy_opening):
        C, z, value, _ = toy_opening
        with pytest.raises(KZGError):
            verify_opening(C, "proof", z, value, toy_srs)

    def test_as_verification_key(self, toy_srs):
        assert as_verification_key(toy_srs) is toy_srs.verification_key
        vk = toy_srs.verification_key
        assert as_verification_key(vk) is vk


# ─────────────────────────────────────────────────────────────────────
# bn128
# ─────────────────────────────────────────────────────────────────────

class TestVerifyBN128:
    """bn128 페어링 검증 테스트."""

    def test_valid_opening(self, srs_small, bn_opening):
        assert verify_opening(*bn_opening, srs_small.verification_key)

    def test_wrong_value(self, srs_small, bn_opening):
        C, z, value, proof = bn_opening
        assert not verify_opening(C, proof, z, value + 1, srs_small)

    def test_wrong_point(self, srs_small, bn_opening):
        C, z, value, proof = bn_opening
        assert not verify_opening(C, proof, z + 1, value, srs_small)

    def test_swapped_commitment_and_proof(self, srs_small, bn_opening):
        C, z, value, proof = bn_opening
        assert BN128.is_g1(proof)
        assert not verify_opening(proof, C, z, value, srs_small)
