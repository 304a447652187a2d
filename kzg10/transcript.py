"""
KZG Fiat-Shamir Transcript
============================

일괄 검증 계수를 호출자 쪽에서 유도하기 위한 해시 트랜스크립트.

커밋/열기/검증 코어는 이 모듈을 사용하지 않는다. 코어는 계수를 입력으로
받을 뿐이며, 계수를 어떻게 뽑을지는 상위 프로토콜이 정한다.
이 모듈은 그 중 한 가지 방식 (주장 자체를 해싱) 을 제공한다.

**Fiat-Shamir 변환이란?**
  대화식 프로토콜에서 Verifier가 보내는 랜덤 챌린지를
  지금까지의 모든 메시지의 해시로 대체한다.
  Prover와 Verifier가 같은 순서로 같은 데이터를 추가하면 같은 챌린지를 얻는다.

사용 예시:
    >>> t = Transcript(curve)
    >>> t.append_point(b"commitment", C)
    >>> r = t.challenge_scalar(b"r")
    >>> coefficients = batch_coefficients(claims, curve)
"""

import hashlib

BATCH_LABEL = b"kzg10-batch"


class Transcript:
    """SHA-256 기반 Fiat-Shamir 트랜스크립트.

    해시 상태를 누적하여 결정론적이면서 예측 불가능한 챌린지를 생성한다.

    속성:
        curve: 스칼라/점 인코딩에 쓰는 곡선 어댑터
        state: 현재까지 누적된 해시 입력 바이트열

    보안 주의:
        - 모든 데이터는 레이블(label)과 함께 추가하여 도메인 분리(domain separation) 보장
        - 트랜스크립트 순서가 다르면 다른 챌린지가 생성됨
    """

    def __init__(self, curve, label=BATCH_LABEL):
        self.curve = curve
        self.state = bytearray()
        self.state.extend(label)

    def append_scalar(self, label, scalar):
        """스칼라 값을 트랜스크립트에 추가한다 (32바이트 빅엔디안)."""
        self.state.extend(label)
        val = int(self.curve.scalar(scalar))
        self.state.extend(val.to_bytes(32, "big"))

    def append_point(self, label, point):
        """G1 점을 트랜스크립트에 추가한다."""
        self.state.extend(label)
        self.state.extend(self.curve.point_bytes(point))

    def challenge_scalar(self, label):
        """트랜스크립트로부터 챌린지 스칼라를 생성한다.

        현재 상태를 SHA-256으로 해싱하여 스칼라 체 원소로 축소한다.
        생성된 해시는 상태에 다시 추가된다 (체이닝).
        """
        self.state.extend(label)
        h = hashlib.sha256(bytes(self.state)).digest()
        challenge = self.curve.scalar_field(int.from_bytes(h, "big") % self.curve.order)

        # 체이닝: 다음 챌린지에 영향
        self.state.extend(h)
        return challenge

    def challenge_nonzero(self, label):
        """0이 아닐 때까지 챌린지를 다시 뽑는다."""
        challenge = self.challenge_scalar(label)
        while challenge == 0:
            challenge = self.challenge_scalar(label)
        return challenge


def batch_coefficients(claims, curve, label=BATCH_LABEL):
    """주장 목록에서 0이 아닌 일괄 검증 계수를 유도한다.

    모든 주장 (C, z, y, π)을 먼저 흡수한 뒤 주장 수만큼 챌린지를 뽑는다.
    어느 한 주장이라도 바뀌면 모든 계수가 바뀐다.

    Args:
        claims: (commitment, point, value, proof) 시퀀스
        curve: 곡선 어댑터

    Returns:
        list: 주장 수와 같은 길이의 스칼라 리스트
    """
    claims = list(claims)
    transcript = Transcript(curve, label)
    for commitment, point, value, proof in claims:
        transcript.append_point(b"C", commitment)
        transcript.append_scalar(b"z", point)
        transcript.append_scalar(b"y", value)
        transcript.append_point(b"pi", proof)
    return [transcript.challenge_nonzero(b"r") for _ in claims]
