"""
KZG 일괄(batch) 검증
=====================

여러 열기 주장을 임의 계수 rᵢ로 선형결합하여 페어링 횟수를 줄인다.
두 가지 배치 방식을 서로 다른 진입점으로 제공한다.

**1. 다중 다항식 · 다중 점 (verify_batch)**:
  주장 (Cᵢ, zᵢ, yᵢ, πᵢ)마다 개별 증명이 있다. 각 주장의 등식
      e(πᵢ, s·G2) == e(Cᵢ - yᵢ·G1 + zᵢ·πᵢ, G2)
  에 rᵢ를 곱해 더하면
      A = Σ rᵢ·πᵢ
      B = Σ rᵢ·Cᵢ + Σ rᵢzᵢ·πᵢ - (Σ rᵢyᵢ)·G1
      e(B, G2) == e(A, s·G2)
  페어링 두 번으로 전체를 확인한다.
  같은 다항식을 여러 점에서 연 경우는 Cᵢ가 모두 같은 특수한 경우이다.

**2. 다중 다항식 · 단일 점 (open_same_point / verify_batch_same_point)**:
  같은 점 z에서 연 여러 다항식에 대해 증명 하나만 만든다.
      π = commit(Σ rᵢ·(pᵢ(x) - yᵢ) / (x - z))
      e(Σ rᵢCᵢ - (Σ rᵢyᵢ)·G1, G2) == e(π, s·G2 - z·G2)

**건전성**:
  위조된 주장이 하나 이상 있으면 결합 등식은 rᵢ에 대한 0이 아닌 일차식이
  0이 되는 경우에만 통과한다. 0을 제외한 rᵢ가 균등하게 뽑히면 그 확률은
  1/(|F| - 1) 이하이다 (Schwartz–Zippel). 위조 주장이 하나뿐이면 항상 거부된다.

**입력 검사 (fail closed)**:
  빈 배치, 길이 불일치 → BatchArityMismatch
  0 계수 → MalformedInput
  모두 군 연산/페어링 이전에 검사한다.

계수 rᵢ는 호출자가 공급한다 (Fiat–Shamir 유도는 ``kzg10.transcript`` 참고).

사용 예시:
    >>> claims = [OpeningClaim(C1, z1, y1, pi1), OpeningClaim(C2, z2, y2, pi2)]
    >>> verify_batch(srs.verification_key, claims, [r1, r2])
"""

import logging

from kzg10.errors import BatchArityMismatch, InvariantViolation, MalformedInput
from kzg10.kzg import commit, msm, check_polynomial
from kzg10.polynomial import Polynomial
from kzg10.verifier import as_verification_key, check_g1

logger = logging.getLogger(__name__)


class OpeningClaim:
    """공개 열기 주장 (commitment, point, value, proof).

    속성:
        commitment: 다항식 커밋먼트 (G1)
        point: 평가 점 z
        value: 주장하는 평가값 y
        proof: 열기 증명 π (G1)
    """

    __slots__ = ("commitment", "point", "value", "proof")

    def __init__(self, commitment, point, value, proof):
        self.commitment = commitment
        self.point = point
        self.value = value
        self.proof = proof

    def __iter__(self):
        return iter((self.commitment, self.point, self.value, self.proof))

    def __eq__(self, other):
        if not isinstance(other, OpeningClaim):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __repr__(self):
        return f"OpeningClaim(point={self.point!r}, value={self.value!r})"


def _check_coefficients(curve, count, coefficients):
    """계수 개수와 0 여부를 검사하고 스칼라로 정규화한다."""
    coefficients = list(coefficients)
    if count == 0:
        raise BatchArityMismatch("빈 배치는 검증할 수 없습니다")
    if len(coefficients) != count:
        raise BatchArityMismatch(
            f"주장 {count}개에 계수 {len(coefficients)}개가 주어졌습니다"
        )
    scalars = [curve.scalar(r) for r in coefficients]
    for i, r in enumerate(scalars):
        if r == 0:
            raise MalformedInput(f"계수 {i}가 0입니다")
    return scalars


def _normalize_claims(curve, claims):
    normalized = []
    for i, claim in enumerate(claims):
        try:
            commitment, point, value, proof = claim
        except (TypeError, ValueError):
            raise MalformedInput(
                f"주장 {i}가 (commitment, point, value, proof) 형태가 아닙니다"
            ) from None
        normalized.append(OpeningClaim(
            check_g1(curve, commitment, f"claims[{i}].commitment"),
            curve.scalar(point),
            curve.scalar(value),
            check_g1(curve, proof, f"claims[{i}].proof"),
        ))
    return normalized


def fold_claims(curve, claims, coefficients):
    """주장들과 계수를 하나의 페어링 입력 쌍 (A, B)로 접는다.

    A = Σ rᵢ·πᵢ
    B = Σ rᵢ·Cᵢ + Σ rᵢzᵢ·πᵢ - (Σ rᵢyᵢ)·G1

    입력은 이미 정규화되어 있어야 한다. 상태가 없는 순수 축약이다.
    """
    field = curve.scalar_field
    proofs = [c.proof for c in claims]
    commitments = [c.commitment for c in claims]

    folded_proof = msm(curve, proofs, coefficients)
    folded = curve.add(
        msm(curve, commitments, coefficients),
        msm(curve, proofs, [r * c.point for r, c in zip(coefficients, claims)]),
    )
    folded_value = field(0)
    for r, c in zip(coefficients, claims):
        folded_value = folded_value + r * c.value
    return folded_proof, folded, folded_value


def verify_batch(vk, claims, coefficients):
    """다중 다항식 · 다중 점 일괄 검증 (주장마다 개별 증명).

    Args:
        vk: VerificationKey (또는 SRS)
        claims: (commitment, point, value, proof) 시퀀스
        coefficients: 주장과 같은 길이의 0이 아닌 임의 스칼라

    Returns:
        bool: 결합 등식 e(B, G2) == e(A, s·G2)의 성립 여부

    Raises:
        BatchArityMismatch: 빈 배치 또는 길이 불일치
        MalformedInput: 0 계수, 군/체 원소가 아닌 입력
    """
    vk = as_verification_key(vk)
    curve = vk.curve
    claims = list(claims)
    scalars = _check_coefficients(curve, len(claims), coefficients)
    claims = _normalize_claims(curve, claims)

    folded_proof, folded, folded_value = fold_claims(curve, claims, scalars)
    folded = curve.add(folded, curve.neg(curve.mul(vk.g1, folded_value)))

    lhs = curve.pairing(folded, vk.g2)
    rhs = curve.pairing(folded_proof, vk.s_g2)
    result = lhs == rhs
    logger.debug("verify_batch: claims=%d, result=%s", len(claims), result)
    return result


# ─────────────────────────────────────────────────────────────────────
# 단일 점 집계 증명
# ─────────────────────────────────────────────────────────────────────

def open_same_point(polys, point, coefficients, srs):
    """여러 다항식을 같은 점 z에서 열고 집계 증명 하나를 만든다.

    h(x) = Σ rᵢ · (pᵢ(x) - pᵢ(z)) / (x - z)
    π = commit(h)

    Args:
        polys: 다항식 시퀀스
        point: 공통 평가 점 z
        coefficients: 다항식과 같은 길이의 0이 아닌 스칼라
        srs: SRS

    Returns:
        tuple: ([y₀, y₁, ...], π)
    """
    curve = srs.curve
    polys = list(polys)
    scalars = _check_coefficients(curve, len(polys), coefficients)
    for poly in polys:
        check_polynomial(poly, srs)
    z = curve.scalar(point)

    values = []
    aggregate = Polynomial.zero(curve.scalar_field)
    for poly, r in zip(polys, scalars):
        value = poly.evaluate(z)
        quotient, remainder = (poly - value).divide_by_linear(z)
        if remainder != 0:
            raise InvariantViolation("몫 다항식의 나머지가 0이 아닙니다")
        values.append(value)
        aggregate = aggregate + quotient.scale(r)

    logger.debug("open_same_point: polys=%d", len(polys))
    return values, commit(aggregate, srs)


def verify_batch_same_point(vk, commitments, point, values, proof, coefficients):
    """다중 다항식 · 단일 점 집계 증명을 검증한다.

    e(Σ rᵢCᵢ - (Σ rᵢyᵢ)·G1, G2) == e(π, s·G2 - z·G2)

    Raises:
        BatchArityMismatch: 빈 배치 또는 commitments/values/coefficients 길이 불일치
        MalformedInput: 0 계수, 군/체 원소가 아닌 입력
    """
    vk = as_verification_key(vk)
    curve = vk.curve
    commitments = list(commitments)
    values = list(values)
    if len(values) != len(commitments):
        raise BatchArityMismatch(
            f"커밋먼트 {len(commitments)}개에 평가값 {len(values)}개가 주어졌습니다"
        )
    scalars = _check_coefficients(curve, len(commitments), coefficients)
    for i, commitment in enumerate(commitments):
        check_g1(curve, commitment, f"commitments[{i}]")
    check_g1(curve, proof, "proof")
    z = curve.scalar(point)
    ys = [curve.scalar(y) for y in values]

    folded_value = curve.scalar_field(0)
    for r, y in zip(scalars, ys):
        folded_value = folded_value + r * y
    folded = curve.add(
        msm(curve, commitments, scalars),
        curve.neg(curve.mul(vk.g1, folded_value)),
    )
    s_minus_z_g2 = curve.add(vk.s_g2, curve.neg(curve.mul(vk.g2, z)))

    lhs = curve.pairing(folded, vk.g2)
    rhs = curve.pairing(proof, s_minus_z_g2)
    result = lhs == rhs
    logger.debug("verify_batch_same_point: polys=%d, result=%s", len(commitments), result)
    return result
