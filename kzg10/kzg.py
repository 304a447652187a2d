"""
KZG 다항식 커밋먼트 스킴: 커밋과 열기
=======================================

Kate-Zaverucha-Goldberg (KZG10) 커밋먼트의 prover 쪽 연산이다.

**KZG 커밋먼트란?**
  다항식 p(x)에 대한 간결한 "지문"(커밋먼트)을 G1 점 하나로 만든다.
  - 커밋먼트: C = p(s)·G1 (s는 SRS의 비밀 값)
  - 바인딩(binding): 신뢰할 수 있는 SRS 아래에서 같은 커밋먼트를 내는
    서로 다른 두 다항식(차수 ≤ d)을 찾는 것은 계산적으로 불가능하다.
  - 하이딩(hiding)은 보장하지 않는다: 블라인딩 인자가 없으므로 커밋은
    결정론적이고, 같은 다항식은 항상 같은 커밋먼트를 낸다.

**열기 증명 (Opening Proof)**:
  "p(z) = y" 임을 증명하는 방법:
  1. y = p(z)
  2. 몫 다항식 q(x) = (p(x) - y) / (x - z)
     (p(z) = y이면 (x-z)가 (p(x)-y)를 나누므로 나머지가 0)
  3. 증명 π = commit(q) = q(s)·G1

  검증은 ``kzg10.verifier``를 참고.

사용 예시:
    >>> from kzg10.kzg import commit, create_opening
    >>> C = commit(poly, srs)
    >>> value, proof = create_opening(poly, 7, srs)
"""

import logging

from kzg10.errors import DegreeTooLarge, InvariantViolation, MalformedInput
from kzg10.polynomial import Polynomial

logger = logging.getLogger(__name__)


def msm(curve, points, scalars):
    """다중 스칼라 곱셈 Σᵢ scalarᵢ · pointᵢ.

    0 스칼라는 건너뛴다. 결과가 없으면 G1 항등원.
    """
    result = curve.zero_g1
    for point, scalar in zip(points, scalars):
        if scalar == 0:
            continue
        result = curve.add(result, curve.mul(point, scalar))
    return result


def check_polynomial(poly, srs):
    if not isinstance(poly, Polynomial):
        raise MalformedInput(f"Polynomial이 아닙니다: {type(poly).__name__}")
    if poly.field.field_modulus != srs.curve.order:
        raise MalformedInput(
            f"다항식 체의 위수 {poly.field.field_modulus}가 곡선 위수와 다릅니다"
        )
    if poly.degree > srs.max_degree:
        raise DegreeTooLarge(
            f"다항식 차수 {poly.degree}가 SRS 최대 차수 {srs.max_degree}를 초과합니다"
        )


def commit(poly, srs):
    """다항식을 KZG 커밋한다.

    C = Σᵢ cᵢ · [sⁱ]₁ = p(s) · G1

    SRS의 G1 powers [G1, sG1, s²G1, ...]에 다항식 계수를 곱하여
    선형결합한다. s를 모르는 상태에서 p(s)·G1을 계산하는 것이다.

    Args:
        poly: 커밋할 다항식 (Polynomial)
        srs: Structured Reference String (SRS)

    Returns:
        G1 점: 커밋먼트 C (영 다항식이면 항등원)

    Raises:
        DegreeTooLarge: 다항식 차수가 SRS 최대 차수를 초과할 때
        MalformedInput: 다항식의 체가 SRS 곡선과 맞지 않을 때

    예시:
        >>> p = Polynomial([1, 2, 3])  # 1 + 2x + 3x²
        >>> C = commit(p, srs)         # (1 + 2s + 3s²)·G1
    """
    check_polynomial(poly, srs)
    logger.debug("commit: degree=%d", poly.degree)
    return msm(srs.curve, srs.g1_powers, poly.coeffs)


def create_opening(poly, point, srs):
    """점 z에서의 평가값과 열기 증명(opening proof)을 만든다.

    수학적 근거:
        p(z) = y이면 (p(x) - y)는 (x - z)로 나누어 떨어진다.
        (다항식의 인수정리: f(a) = 0 ⟺ (x-a) | f(x))

    Args:
        poly: 열어볼 다항식 p(x)
        point: 평가 점 z (정수 또는 스칼라 체 원소)
        srs: SRS

    Returns:
        tuple: (y = p(z), 증명 π = commit(q))

    Raises:
        DegreeTooLarge: commit과 같은 조건
        InvariantViolation: 나머지가 0이 아닐 때 (다항식 엔진 버그)

    예시:
        >>> p = Polynomial([1, 2])  # 1 + 2x
        >>> value, proof = create_opening(p, 3, srs)  # value == 7
    """
    check_polynomial(poly, srs)
    z = srs.curve.scalar(point)

    # y = p(z)
    value = poly.evaluate(z)

    # q(x) = (p(x) - y) / (x - z)
    quotient, remainder = (poly - value).divide_by_linear(z)
    if remainder != 0:
        raise InvariantViolation("몫 다항식의 나머지가 0이 아닙니다")

    logger.debug("open: degree=%d", poly.degree)
    return value, commit(quotient, srs)
