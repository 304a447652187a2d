"""
KZG 오류 종류
==============

커밋먼트/열기/검증 경계에서 발생하는 오류를 정의한다.

검증 실패(페어링 등식이 성립하지 않음)는 오류가 아니라 ``False`` 결과이다.
아래 예외는 입력 자체가 잘못되었을 때만 발생한다.
"""


class KZGError(ValueError):
    """모든 사용자 입력 오류의 기반 클래스."""

    kind = "KZGError"


class InvalidDegree(KZGError):
    """setup 요청 차수가 1 미만이거나 지원 한도를 초과한다."""

    kind = "InvalidDegree"


class DegreeTooLarge(KZGError):
    """다항식 차수가 SRS 최대 차수를 초과한다."""

    kind = "DegreeTooLarge"


class MalformedInput(KZGError):
    """군/체 원소가 기대하는 집합의 원소가 아니다."""

    kind = "MalformedInput"


class BatchArityMismatch(KZGError):
    """일괄 검증의 튜플 수와 계수 수가 맞지 않는다."""

    kind = "BatchArityMismatch"


class InvariantViolation(RuntimeError):
    """내부 불변식 위반 (다항식 엔진 버그에서만 발생)."""
