"""
KZG Structured Reference String (SRS)
=======================================

신뢰 설정(trusted setup)을 생성한다.

**SRS란?**
  KZG 다항식 커밋먼트 스킴에 필요한 공개 파라미터이다.
  비밀 값 s ("toxic waste")를 사용하여 생성되며,
  생성 후 s는 반드시 폐기되어야 한다.

  SRS = {
      proving key:      [G1, s·G1, s²·G1, ..., s^d·G1]
      verification key: [G1, G2, s·G2]
  }

  검증 키의 G1은 곡선의 고정 생성자 그대로이며 s와 무관하다.

**Toxic waste 처리**:
  s는 ``ToxicWaste`` 컨텍스트 안에서만 존재한다. 내부 바이트 버퍼는
  컨텍스트를 빠져나갈 때 0으로 덮어쓰며, 반환되는 SRS에는 s가 들어 있지 않다.
  Python 정수는 제자리에서 지울 수 없으므로, 거듭제곱 계산에 쓰이는
  중간 스칼라는 같은 스코프 안에서 참조를 끊는다.

**보안**:
  s를 아는 사람은 임의의 거짓 증명을 만들 수 있다.
  ``generate_deterministic``은 seed에서 s를 유도하므로 seed를 아는 누구나
  s를 재현할 수 있다. 재현 가능한 테스트 전용이며 보안성이 없다.

사용 예시:
    >>> srs = SRS.generate(max_degree=16)
    >>> srs.max_degree  # 16
    >>> test_srs = SRS.generate_deterministic(max_degree=4, seed=42)
"""

import hashlib
import logging
import secrets

from kzg10.errors import InvalidDegree, MalformedInput
from kzg10.field import BN128

logger = logging.getLogger(__name__)

# setup이 허용하는 최대 차수
MAX_SUPPORTED_DEGREE = 1 << 20


# ─────────────────────────────────────────────────────────────────────
# Toxic waste
# ─────────────────────────────────────────────────────────────────────

class ToxicWaste:
    """setup 비밀 스칼라를 담는 스코프 한정 컨테이너.

    값은 bytearray에 빅엔디안으로 보관되고, ``with`` 블록을 벗어나면
    ``wipe()``로 모든 바이트가 0이 된다. 지워진 뒤 ``scalar()``는 실패한다.

    예시:
        >>> with ToxicWaste(7, curve) as waste:
        ...     s = waste.scalar()
        >>> waste.wiped  # True
    """

    def __init__(self, value, curve):
        width = (curve.order.bit_length() + 7) // 8
        self._curve = curve
        self._buffer = bytearray(int(value).to_bytes(width, "big"))
        self.wiped = False

    def scalar(self):
        if self.wiped:
            raise RuntimeError("이미 폐기된 toxic waste입니다")
        return self._curve.scalar_field(int.from_bytes(self._buffer, "big"))

    def wipe(self):
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        self.wiped = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.wipe()
        return False

    def __repr__(self):
        return "ToxicWaste(<redacted>)"


def _derive_secret(seed, order):
    """seed에서 0이 아닌 s를 SHA-256으로 유도한다 (카운터로 0 회피)."""
    counter = 0
    while True:
        h = hashlib.sha256(f"{seed}:{counter}".encode()).digest()
        value = int.from_bytes(h, "big") % order
        if value != 0:
            return value
        counter += 1


def _check_degree(max_degree):
    if isinstance(max_degree, bool) or not isinstance(max_degree, int):
        raise InvalidDegree(f"최대 차수는 정수여야 합니다: {max_degree!r}")
    if max_degree < 1:
        raise InvalidDegree(f"최대 차수는 1 이상이어야 합니다: {max_degree}")
    if max_degree > MAX_SUPPORTED_DEGREE:
        raise InvalidDegree(
            f"최대 차수 {max_degree}가 지원 한도 {MAX_SUPPORTED_DEGREE}를 초과합니다"
        )


# ─────────────────────────────────────────────────────────────────────
# 키 구조
# ─────────────────────────────────────────────────────────────────────

class ProvingKey:
    """커밋/열기에 쓰는 G1 거듭제곱 [G1, s·G1, ..., s^d·G1].

    속성:
        curve: 곡선 어댑터
        g1_powers: G1 점 튜플 (길이 d + 1)
    """

    __slots__ = ("curve", "g1_powers")

    def __init__(self, curve, g1_powers):
        g1_powers = tuple(g1_powers)
        if len(g1_powers) < 2:
            raise InvalidDegree("proving key에는 최소 2개의 G1 원소가 필요합니다")
        for i, point in enumerate(g1_powers):
            if not curve.is_g1(point):
                raise MalformedInput(f"g1_powers[{i}]가 G1 원소가 아닙니다")
        object.__setattr__(self, "curve", curve)
        object.__setattr__(self, "g1_powers", g1_powers)

    def __setattr__(self, name, value):
        raise AttributeError("ProvingKey는 변경할 수 없습니다")

    @property
    def max_degree(self):
        return len(self.g1_powers) - 1

    def __eq__(self, other):
        if not isinstance(other, ProvingKey):
            return NotImplemented
        return self.curve == other.curve and self.g1_powers == other.g1_powers

    def __hash__(self):
        return hash((self.curve, len(self.g1_powers)))


class VerificationKey:
    """검증에 쓰는 고정 원소 {G1, G2, s·G2}.

    g1, g2는 곡선의 고정 생성자여야 하고 s·G2는 항등원이 아닌 G2 원소여야 한다.
    외부 ceremony 결과도 같은 경로로 들어온다.
    """

    __slots__ = ("curve", "g1", "g2", "s_g2")

    def __init__(self, curve, g1, g2, s_g2):
        if g1 != curve.G1:
            raise MalformedInput("검증 키의 g1이 G1 생성자가 아닙니다")
        if g2 != curve.G2:
            raise MalformedInput("검증 키의 g2가 G2 생성자가 아닙니다")
        if not curve.is_g2(s_g2) or s_g2 == curve.mul(curve.G2, 0):
            raise MalformedInput("검증 키의 s·G2가 0이 아닌 G2 원소가 아닙니다")
        object.__setattr__(self, "curve", curve)
        object.__setattr__(self, "g1", g1)
        object.__setattr__(self, "g2", g2)
        object.__setattr__(self, "s_g2", s_g2)

    def __setattr__(self, name, value):
        raise AttributeError("VerificationKey는 변경할 수 없습니다")

    def __eq__(self, other):
        if not isinstance(other, VerificationKey):
            return NotImplemented
        return (self.curve == other.curve and self.g1 == other.g1
                and self.g2 == other.g2 and self.s_g2 == other.s_g2)

    def __hash__(self):
        return hash(self.curve)


# ─────────────────────────────────────────────────────────────────────
# SRS
# ─────────────────────────────────────────────────────────────────────

class SRS:
    """Structured Reference String: KZG 커밋먼트용 공개 파라미터.

    한 번 만들어지면 읽기 전용으로 공유된다.

    속성:
        curve: 곡선 어댑터
        proving_key: ProvingKey
        verification_key: VerificationKey
    """

    __slots__ = ("curve", "proving_key", "verification_key")

    def __init__(self, proving_key, verification_key):
        if proving_key.curve != verification_key.curve:
            raise MalformedInput("proving key와 verification key의 곡선이 다릅니다")
        if proving_key.g1_powers[0] != verification_key.g1:
            raise MalformedInput("proving key의 첫 원소가 검증 키 g1과 다릅니다")
        object.__setattr__(self, "curve", proving_key.curve)
        object.__setattr__(self, "proving_key", proving_key)
        object.__setattr__(self, "verification_key", verification_key)

    def __setattr__(self, name, value):
        raise AttributeError("SRS는 변경할 수 없습니다")

    @property
    def max_degree(self):
        """지원하는 최대 다항식 차수 d."""
        return self.proving_key.max_degree

    @property
    def g1_powers(self):
        return self.proving_key.g1_powers

    def __eq__(self, other):
        if not isinstance(other, SRS):
            return NotImplemented
        return (self.proving_key == other.proving_key
                and self.verification_key == other.verification_key)

    def __hash__(self):
        return hash((self.curve, self.max_degree))

    def __repr__(self):
        return f"SRS(curve={self.curve.name}, max_degree={self.max_degree})"

    @classmethod
    def generate(cls, max_degree, curve=BN128, rng=None):
        """무작위 s로 SRS를 생성한다.

        Args:
            max_degree: 지원할 최대 다항식 차수 d (1 이상)
            curve: 곡선 어댑터 (기본값: bn128)
            rng: ``randrange``를 가진 난수원. 기본값은 secrets.SystemRandom()

        Returns:
            SRS

        Raises:
            InvalidDegree: d < 1 이거나 지원 한도 초과
        """
        _check_degree(max_degree)
        rng = rng or secrets.SystemRandom()
        with ToxicWaste(int(curve.random_scalar(rng)), curve) as waste:
            srs = cls._from_secret(waste, max_degree, curve)
        logger.info("SRS 생성: curve=%s, max_degree=%d", curve.name, max_degree)
        return srs

    @classmethod
    def generate_deterministic(cls, max_degree, seed, curve=BN128):
        """seed에서 s를 유도하여 SRS를 생성한다.

        경고: s가 seed로부터 공개적으로 재현되므로 보안성이 전혀 없다.
        같은 seed는 항상 같은 SRS를 만든다. 테스트 전용.
        """
        _check_degree(max_degree)
        with ToxicWaste(_derive_secret(seed, curve.order), curve) as waste:
            srs = cls._from_secret(waste, max_degree, curve)
        logger.warning(
            "결정론적 SRS 생성 (테스트 전용, toxic waste 공개됨): curve=%s, max_degree=%d",
            curve.name, max_degree,
        )
        return srs

    @classmethod
    def _from_secret(cls, waste, max_degree, curve):
        s = waste.scalar()

        # G1 powers: [G1, s·G1, s²·G1, ..., s^d·G1]
        g1_powers = []
        s_power = curve.scalar_field(1)
        for _ in range(max_degree + 1):
            g1_powers.append(curve.mul(curve.G1, s_power))
            s_power = s_power * s

        s_g2 = curve.mul(curve.G2, s)
        del s, s_power

        return cls(
            ProvingKey(curve, g1_powers),
            VerificationKey(curve, curve.G1, curve.G2, s_g2),
        )
