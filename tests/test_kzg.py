"""
Tests for kzg10.kzg: commit and create_opening.

Covers:
- commit evaluates the polynomial "in the exponent" (toy curve exposes it)
- linearity, determinism, zero polynomial
- degree bound and malformed polynomial errors
- the worked example p(x) = 3x² + 2x + 1 opened at z = 5 over F_101
- binding on bn128
"""

import pytest

from kzg10.errors import DegreeTooLarge, InvariantViolation, MalformedInput
from kzg10.field import BN128, FR, G1
from kzg10.kzg import commit, create_opening, msm
from kzg10.polynomial import Polynomial
from kzg10.verifier import verify_opening


def secret_of(toy_srs):
    """toy SRS는 s를 그대로 노출한다: g1_powers[1] = s·g1."""
    return toy_srs.g1_powers[1].exponent


# ─────────────────────────────────────────────────────────────────────
# Commit
# ─────────────────────────────────────────────────────────────────────

class TestCommit:
    """commit 테스트."""

    def test_commit_is_evaluation_at_secret(self, toy, toy_field, toy_srs):
        """C == p(s)·g1."""
        s = secret_of(toy_srs)
        p = Polynomial([1, 2, 3], toy_field)
        assert commit(p, toy_srs) == toy.mul(toy.G1, p.evaluate(s))

    def test_known_polynomial_bn128(self, srs_small):
        """commit(1) == G1 and commit(x) == s·G1."""
        assert commit(Polynomial([1]), srs_small) == G1
        assert commit(Polynomial([0, 1]), srs_small) == srs_small.g1_powers[1]

    def test_zero_polynomial_commits_to_identity(self, toy, toy_field, toy_srs, srs_small):
        assert commit(Polynomial.zero(toy_field), toy_srs) == toy.zero_g1
        assert commit(Polynomial.zero(), srs_small) is None

    def test_linearity(self, toy, toy_field, toy_srs_large):
        """commit(a + b) == commit(a) + commit(b), commit(k·a) == k·commit(a)."""
        a = Polynomial([5, 0, 17, 3], toy_field)
        b = Polynomial([1, 2, 3, 4, 5, 6], toy_field)
        assert commit(a + b, toy_srs_large) == toy.add(
            commit(a, toy_srs_large), commit(b, toy_srs_large))
        assert commit(a.scale(9), toy_srs_large) == toy.mul(commit(a, toy_srs_large), 9)

    def test_linearity_bn128(self, srs_small):
        a = Polynomial([1, 2])
        b = Polynomial([3, 0, 4])
        assert commit(a + b, srs_small) == BN128.add(
            commit(a, srs_small), commit(b, srs_small))

    def test_deterministic(self, srs_small):
        """No blinding: the same polynomial always commits the same way."""
        p = Polynomial([7, 7, 7])
        assert commit(p, srs_small) == commit(p, srs_small)

    def test_binding_bn128(self, srs_small):
        assert commit(Polynomial([1, 2, 3]), srs_small) != commit(Polynomial([1, 2, 4]), srs_small)

    def test_binding_toy(self, toy_field, toy_srs):
        """Changing any single coefficient changes the commitment."""
        base = [1, 2, 3, 4]
        c = commit(Polynomial(base, toy_field), toy_srs)
        for i in range(len(base)):
            for delta in (1, 50, 100):
                mutated = list(base)
                mutated[i] += delta
                assert commit(Polynomial(mutated, toy_field), toy_srs) != c

    def test_max_degree_is_accepted(self, toy_field, toy_srs):
        commit(Polynomial([1, 1, 1, 1], toy_field), toy_srs)

    def test_degree_too_large(self, toy_field, toy_srs):
        p = Polynomial([1, 1, 1, 1, 1], toy_field)
        with pytest.raises(DegreeTooLarge):
            commit(p, toy_srs)
        with pytest.raises(DegreeTooLarge):
            create_opening(p, 5, toy_srs)

    def test_degree_too_large_bn128(self, srs_small):
        with pytest.raises(DegreeTooLarge):
            commit(Polynomial([1] * 6), srs_small)

    def test_field_mismatch(self, toy_srs):
        """A polynomial over FR cannot be committed under a toy SRS."""
        with pytest.raises(MalformedInput):
            commit(Polynomial([1, 2]), toy_srs)

    def test_not_a_polynomial(self, toy_srs):
        with pytest.raises(MalformedInput):
            commit([1, 2, 3], toy_srs)

    def test_msm_skips_zero_scalars(self, toy):
        points = [toy.G1, toy.mul(toy.G1, 10)]
        assert msm(toy, points, [0, 2]) == toy.mul(toy.G1, 20)
        assert msm(toy, points, [0, 0]) == toy.zero_g1


# ─────────────────────────────────────────────────────────────────────
# Opening
# ─────────────────────────────────────────────────────────────────────

class TestCreateOpening:
    """create_opening 테스트."""

    def test_worked_example(self, toy_field, toy_srs):
        """p(x) = 3x² + 2x + 1 over F_101, d=3, opened at z=5 gives 86."""
        p = Polynomial([1, 2, 3], toy_field)
        C = commit(p, toy_srs)
        value, proof = create_opening(p, 5, toy_srs)
        assert value == toy_field(86)
        assert verify_opening(C, proof, 5, value, toy_srs.verification_key)

    def test_worked_example_mutated_polynomial(self, toy_field, toy_srs):
        """Re-committing any mutated polynomial breaks the original opening."""
        p = Polynomial([1, 2, 3], toy_field)
        value, proof = create_opening(p, 5, toy_srs)
        mutations = [[2, 2, 3], [1, 3, 3], [1, 2, 4], [1, 2, 3, 1]]
        for coeffs in mutations:
            C = commit(Polynomial(coeffs, toy_field), toy_srs)
            assert not verify_opening(C, proof, 5, value, toy_srs.verification_key)

    def test_proof_is_quotient_commitment(self, toy, toy_field, toy_srs):
        """π == q(s)·g1 with q = (p - y)/(x - z)."""
        s = secret_of(toy_srs)
        p = Polynomial([9, 0, 4, 1], toy_field)
        value, proof = create_opening(p, 12, toy_srs)
        q, r = (p - value).divide_by_linear(12)
        assert r == 0
        assert proof == toy.mul(toy.G1, q.evaluate(s))

    def test_opening_at_secret_point(self, toy_field, toy_srs):
        """z == s is still a valid opening (both sides collapse to zero)."""
        s = secret_of(toy_srs)
        p = Polynomial([4, 4, 4], toy_field)
        C = commit(p, toy_srs)
        value, proof = create_opening(p, s, toy_srs)
        assert verify_opening(C, proof, s, value, toy_srs)

    def test_constant_polynomial(self, toy, toy_field, toy_srs):
        p = Polynomial([42], toy_field)
        value, proof = create_opening(p, 7, toy_srs)
        assert value == 42
        assert proof == toy.zero_g1

    def test_zero_polynomial(self, toy_field, toy_srs):
        p = Polynomial.zero(toy_field)
        value, proof = create_opening(p, 3, toy_srs)
        assert value == 0
        assert verify_opening(commit(p, toy_srs), proof, 3, value, toy_srs)

    def test_point_as_field_element(self, toy_field, toy_srs):
        p = Polynomial([1, 2, 3], toy_field)
        value, _ = create_opening(p, toy_field(5), toy_srs)
        assert value == 86

    def test_point_from_wrong_field(self, toy_field, toy_srs):
        p = Polynomial([1, 2, 3], toy_field)
        with pytest.raises(MalformedInput):
            create_opening(p, FR(5), toy_srs)

    def test_nonzero_remainder_is_invariant_violation(self, monkeypatch, toy_field, toy_srs):
        def broken(self, point):
            return Polynomial.zero(self.field), self.field(1)

        monkeypatch.setattr(Polynomial, "divide_by_linear", broken)
        with pytest.raises(InvariantViolation):
            create_opening(Polynomial([1, 2], toy_field), 3, toy_srs)

    def test_bn128_roundtrip(self, srs_small):
        p = Polynomial([1, 2, 3])
        C = commit(p, srs_small)
        value, proof = create_opening(p, 5, srs_small)
        assert value == FR(86)
        assert verify_opening(C, proof, 5, value, srs_small.verification_key)
