"""
KZG Verifier
==============

단일 열기 증명을 페어링 등식 하나로 검증한다.

**검증 방정식**:
    e(C - y·G1, G2) == e(π, s·G2 - z·G2)

  π = q(s)·G1, q(x) = (p(x) - y)/(x - z) 이면
  좌변 지수 p(s) - y, 우변 지수 q(s)·(s - z) 가 같다.
  반대로 등식이 성립하면 C는 q(x)·(x - z) + y 에 대한 커밋먼트이다.

**입력 검사**:
  커밋먼트와 증명이 G1 원소인지, 점과 값이 곡선의 스칼라 체 원소인지
  페어링 전에 확인한다. 잘못된 입력은 MalformedInput,
  등식 불일치는 ``False``이다.

검증은 다항식을 보지 않으며 부수 효과가 없다.

사용 예시:
    >>> from kzg10.verifier import verify_opening
    >>> verify_opening(C, proof, 7, value, srs.verification_key)  # True
"""

import logging

from kzg10.errors import MalformedInput
from kzg10.srs import SRS, VerificationKey

logger = logging.getLogger(__name__)


def as_verification_key(key):
    """SRS 또는 VerificationKey에서 검증 키를 꺼낸다."""
    if isinstance(key, SRS):
        return key.verification_key
    if isinstance(key, VerificationKey):
        return key
    raise MalformedInput(f"검증 키가 아닙니다: {type(key).__name__}")


def check_g1(curve, point, label):
    if not curve.is_g1(point):
        raise MalformedInput(f"{label}이(가) G1 원소가 아닙니다")
    return point


def verify_opening(commitment, proof, point, value, vk):
    """KZG 열기 증명을 검증한다.

    Args:
        commitment: 다항식 커밋먼트 C (G1 점)
        proof: 열기 증명 π (G1 점)
        point: 평가 점 z
        value: 주장하는 평가값 y = p(z)
        vk: VerificationKey (또는 SRS)

    Returns:
        bool: 검증 성공 여부

    Raises:
        MalformedInput: 군/체 원소가 아닌 입력

    예시:
        >>> C = commit(p, srs)
        >>> y, pi = create_opening(p, 3, srs)
        >>> verify_opening(C, pi, 3, y, srs.verification_key)  # True
    """
    vk = as_verification_key(vk)
    curve = vk.curve
    check_g1(curve, commitment, "commitment")
    check_g1(curve, proof, "proof")
    z = curve.scalar(point)
    y = curve.scalar(value)

    # [s - z]₂ = s·G2 - z·G2
    s_minus_z_g2 = curve.add(vk.s_g2, curve.neg(curve.mul(vk.g2, z)))

    # C - y·G1
    c_minus_y = curve.add(commitment, curve.neg(curve.mul(vk.g1, y)))

    # 페어링 검사: e(C - y·G1, G2) == e(π, [s-z]₂)
    lhs = curve.pairing(c_minus_y, vk.g2)
    rhs = curve.pairing(proof, s_minus_z_g2)
    result = lhs == rhs
    logger.debug("verify_opening: result=%s", result)
    return result
