"""
KZG 기반 모듈: 스칼라 체(Field) 및 곡선 어댑터
=================================================

이 모듈은 KZG 커밋먼트 로직이 의존하는 대수적 능력(capability)을 정의한다.

**능력 집합 (capability set)**:
  커밋/열기/검증 코드는 특정 곡선을 상속하지 않고, 아래 속성과 메서드를
  가진 어댑터 객체를 받아서 동작한다.

  - ``name``, ``order``, ``scalar_field``: 곡선 이름, 스칼라 체 위수, 체 원소 클래스
  - ``G1``, ``G2``, ``zero_g1``: 고정 생성자와 G1 항등원
  - ``scalar(x)``: 정수/체 원소를 스칼라 체 원소로 정규화
  - ``add``, ``neg``, ``mul``: 군 연산 (덧셈 표기)
  - ``pairing(P, Q)``: 쌍선형 사상 e(G1, G2) → GT
  - ``is_g1``, ``is_g2``: 군 소속 검사
  - ``random_scalar(rng)``: 0이 아닌 균등 난수 스칼라
  - ``point_bytes(P)``: 트랜스크립트 해싱용 바이트 표현

**BN128Curve**:
  py_ecc의 bn128 곡선을 감싼 실제 사용용 어댑터.
  - 위수 r ≈ 2^254, 무한원점은 ``None``으로 표현

**ToyCurve**:
  작은 소수 위수의 "페어링 시뮬레이터". 각 군 원소를 생성자에 대한
  이산로그(지수)로 추적한다: e(a·g₁, b·g₂) = ab·g_T.
  이산로그가 그대로 노출되므로 보안성이 전혀 없다. 위수 101 같은 작은 체에서
  건전성(soundness) 실패 확률을 눈으로 확인하는 테스트 용도로만 쓴다.

사용 예시:
    >>> from kzg10.field import BN128, ToyCurve
    >>> P = BN128.mul(BN128.G1, 5)      # 5·G1
    >>> toy = ToyCurve(101)
    >>> toy.pairing(toy.mul(toy.G1, 3), toy.mul(toy.G2, 4))  # ToyPoint(GT, exp=12)
"""

import functools

from py_ecc.fields import bn128_FQ as FQ
from py_ecc.fields.field_elements import FQ as PrimeFieldElement
from py_ecc import bn128

from kzg10.errors import MalformedInput


# ─────────────────────────────────────────────────────────────────────
# 유한체(Finite Field) FR
# ─────────────────────────────────────────────────────────────────────

class FR(FQ):
    """bn128 스칼라 필드 위의 유한체 원소.

    bn128.curve_order (≈ 2^254) 위의 모듈러 산술을 지원한다.
    py_ecc의 FQ 클래스를 상속하여 +, -, *, /, ** 등의 필드 연산을 제공한다.

    예시:
        >>> x = FR(3)
        >>> x * x          # FR(9)
        >>> FR(1) / FR(3)   # 3의 모듈러 역원
    """
    field_modulus = bn128.curve_order


# 곡선 위수 (필드 크기)
CURVE_ORDER = bn128.curve_order

# G1, G2 그룹 생성자 (generator)
G1 = bn128.G1
G2 = bn128.G2

# 영점 (point at infinity) - 항등원
Z1 = None  # bn128에서 G1의 항등원은 None으로 표현

# 테스트용 toy 곡선의 기본 위수
DEFAULT_TOY_MODULUS = 101

# toy 곡선 위수 상한 (소수 판정은 시행 나눗셈)
MAX_TOY_MODULUS = 1 << 16


def coerce_scalar(field, order, value):
    """정수 또는 같은 위수의 체 원소를 ``field`` 원소로 변환한다.

    다른 위수의 체 원소, bool, 그 밖의 타입은 MalformedInput.
    """
    if isinstance(value, bool):
        raise MalformedInput(f"스칼라 자리에 bool이 들어왔습니다: {value!r}")
    if isinstance(value, int):
        return field(value)
    if isinstance(value, PrimeFieldElement) and value.field_modulus == order:
        return field(value.n)
    raise MalformedInput(f"위수 {order} 체의 스칼라가 아닙니다: {value!r}")


# ─────────────────────────────────────────────────────────────────────
# 타원곡선 연산 (bn128)
# ─────────────────────────────────────────────────────────────────────

def ec_mul(point, scalar):
    """타원곡선 스칼라 곱셈: scalar · point.

    예시:
        >>> P = ec_mul(G1, FR(5))  # 5·G1
    """
    if point is None:
        return None
    scalar = int(scalar) % CURVE_ORDER
    if scalar == 0:
        return None
    return bn128.multiply(point, scalar)


def ec_add(p1, p2):
    """타원곡선 점 덧셈: p1 + p2."""
    if p1 is None:
        return p2
    if p2 is None:
        return p1
    return bn128.add(p1, p2)


def ec_neg(point):
    """타원곡선 점의 역원 (negation): -point."""
    if point is None:
        return None
    return bn128.neg(point)


def ec_pairing(g2_point, g1_point):
    """쌍선형 페어링 e(G1, G2) → GT.

    주의:
        py_ecc.bn128.pairing의 인자 순서는 (G2, G1)이다.
    """
    return bn128.pairing(g2_point, g1_point)


class BN128Curve:
    """py_ecc bn128 위의 곡선 어댑터.

    bn128의 G1은 여인수(cofactor)가 1이므로 곡선 위의 점이면 곧 군 원소이다.
    G2는 곡선 위에 있어도 부분군 밖일 수 있어 r·Q = ∞ 검사를 추가로 한다.
    """

    name = "bn128"
    order = CURVE_ORDER
    scalar_field = FR
    G1 = G1
    G2 = G2
    zero_g1 = Z1

    def scalar(self, value):
        return coerce_scalar(FR, CURVE_ORDER, value)

    def add(self, p1, p2):
        return ec_add(p1, p2)

    def neg(self, point):
        return ec_neg(point)

    def mul(self, point, scalar):
        return ec_mul(point, scalar)

    def pairing(self, g1_point, g2_point):
        return ec_pairing(g2_point, g1_point)

    def is_g1(self, point):
        if point is None:
            return True
        if not isinstance(point, tuple) or len(point) != 2:
            return False
        if not all(type(c) is bn128.FQ for c in point):
            return False
        return bn128.is_on_curve(point, bn128.b)

    def is_g2(self, point):
        if point is None:
            return True
        if not isinstance(point, tuple) or len(point) != 2:
            return False
        if not all(isinstance(c, bn128.FQ2) for c in point):
            return False
        if not bn128.is_on_curve(point, bn128.b2):
            return False
        return bn128.multiply(point, CURVE_ORDER) is None

    def random_scalar(self, rng):
        return FR(rng.randrange(1, CURVE_ORDER))

    def point_bytes(self, point):
        """G1 점 → 64바이트 (x ‖ y), 무한원점은 0으로 채운다."""
        if point is None:
            return b"\x00" * 64
        x, y = point
        return int(x).to_bytes(32, "big") + int(y).to_bytes(32, "big")

    def __eq__(self, other):
        return isinstance(other, BN128Curve)

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return "BN128Curve()"


BN128 = BN128Curve()


# ─────────────────────────────────────────────────────────────────────
# Toy 곡선 (페어링 시뮬레이터)
# ─────────────────────────────────────────────────────────────────────

def _is_prime(n):
    if n < 2:
        return False
    i = 2
    while i * i <= n:
        if n % i == 0:
            return False
        i += 1
    return True


@functools.lru_cache(maxsize=None)
def toy_field(modulus):
    """위수 ``modulus``의 소수체 클래스를 만든다 (위수별로 캐시).

    같은 위수의 ToyCurve 인스턴스들이 하나의 체 클래스를 공유하게 된다.
    """
    if not 2 <= modulus <= MAX_TOY_MODULUS or not _is_prime(modulus):
        raise ValueError(
            f"toy 체의 위수는 {MAX_TOY_MODULUS} 이하의 소수여야 합니다: {modulus}"
        )
    return type(f"ToyFR{modulus}", (PrimeFieldElement,), {"field_modulus": modulus})


class ToyPoint:
    """toy 군 원소: 소속 군 이름과 생성자에 대한 지수."""

    __slots__ = ("group", "exponent", "modulus")

    def __init__(self, group, exponent, modulus):
        self.group = group
        self.exponent = int(exponent) % modulus
        self.modulus = modulus

    def __eq__(self, other):
        if not isinstance(other, ToyPoint):
            return False
        return (self.group, self.exponent, self.modulus) == (
            other.group, other.exponent, other.modulus)

    def __hash__(self):
        return hash((self.group, self.exponent, self.modulus))

    def __repr__(self):
        return f"ToyPoint({self.group}, exp={self.exponent})"


class ToyCurve:
    """작은 소수 위수 r 위의 페어링 시뮬레이터.

    G1, G2, GT를 모두 Z_r의 덧셈군으로 보고, 각 원소를 지수로 추적한다.
    e(a·g₁, b·g₂) = (a·b)·g_T 이므로 쌍선형성이 그대로 성립한다.
    """

    name = "toy"

    def __init__(self, modulus=DEFAULT_TOY_MODULUS):
        self.order = modulus
        self.scalar_field = toy_field(modulus)
        self.G1 = ToyPoint("G1", 1, modulus)
        self.G2 = ToyPoint("G2", 1, modulus)
        self.zero_g1 = ToyPoint("G1", 0, modulus)

    def scalar(self, value):
        return coerce_scalar(self.scalar_field, self.order, value)

    def _check(self, point, group):
        if not (isinstance(point, ToyPoint) and point.group == group
                and point.modulus == self.order):
            raise MalformedInput(f"{group} 원소가 아닙니다: {point!r}")

    def add(self, p1, p2):
        self._check(p2, p1.group)
        return ToyPoint(p1.group, p1.exponent + p2.exponent, self.order)

    def neg(self, point):
        return ToyPoint(point.group, -point.exponent, self.order)

    def mul(self, point, scalar):
        return ToyPoint(point.group, point.exponent * int(scalar), self.order)

    def pairing(self, g1_point, g2_point):
        self._check(g1_point, "G1")
        self._check(g2_point, "G2")
        return ToyPoint("GT", g1_point.exponent * g2_point.exponent, self.order)

    def is_g1(self, point):
        return (isinstance(point, ToyPoint) and point.group == "G1"
                and point.modulus == self.order)

    def is_g2(self, point):
        return (isinstance(point, ToyPoint) and point.group == "G2"
                and point.modulus == self.order)

    def random_scalar(self, rng):
        return self.scalar_field(rng.randrange(1, self.order))

    def point_bytes(self, point):
        width = (self.order.bit_length() + 7) // 8
        return point.group.encode() + point.exponent.to_bytes(width, "big")

    def __eq__(self, other):
        return isinstance(other, ToyCurve) and other.order == self.order

    def __hash__(self):
        return hash((self.name, self.order))

    def __repr__(self):
        return f"ToyCurve({self.order})"


def get_curve(name, modulus=None):
    """이름으로 곡선 어댑터를 찾는다 ("bn128" 또는 "toy").

    toy 곡선의 ``modulus``는 정수 또는 10진 문자열이다. 소수가 아니거나
    MAX_TOY_MODULUS를 넘으면 MalformedInput.
    """
    if name == BN128.name:
        return BN128
    if name == ToyCurve.name:
        modulus = _toy_modulus(modulus)
        try:
            return ToyCurve(modulus)
        except ValueError as exc:
            raise MalformedInput(str(exc)) from None
    raise MalformedInput(f"알 수 없는 곡선입니다: {name!r}")


def _toy_modulus(modulus):
    if modulus is None:
        return DEFAULT_TOY_MODULUS
    if isinstance(modulus, str):
        try:
            modulus = int(modulus)
        except ValueError:
            raise MalformedInput(f"toy 위수로 읽을 수 없습니다: {modulus!r}") from None
    if isinstance(modulus, bool) or not isinstance(modulus, int):
        raise MalformedInput(f"toy 위수는 정수여야 합니다: {modulus!r}")
    return modulus
