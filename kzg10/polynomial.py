"""
KZG 기반 모듈: 다항식(Polynomial) 클래스
==========================================

이 모듈은 KZG 커밋/열기에서 사용되는 모든 다항식 연산을 제공한다.

**Polynomial 클래스**:
  계수(coefficient) 표현 기반 다항식. p(x) = c₀ + c₁·x + c₂·x² + ...
  - 계수는 하나의 스칼라 체(기본값 FR) 원소이며, 생성 후 변경되지 않는다.
  - 최고차의 0 계수는 생성 시 제거된다 (차수가 항상 잘 정의됨).
  - 영 다항식은 계수가 없으며 차수는 -1로 둔다.

**선형 인수 나눗셈 (divide_by_linear)**:
  조립제법(synthetic division)으로 p(x) = q(x)·(x - z) + r 을 계산한다.
  나머지 r은 항상 p(z)와 같다 (다항식 나머지 정리).
  KZG 열기 증명의 몫 다항식 q(x) = (p(x) - p(z)) / (x - z)가 여기서 나온다.

사용 예시:
    >>> from kzg10.polynomial import Polynomial
    >>> p = Polynomial([1, 2, 3])  # 1 + 2x + 3x²
    >>> p.evaluate(5)              # FR(86)
    >>> q, r = p.divide_by_linear(5)
"""

from kzg10.errors import MalformedInput
from kzg10.field import FR


# ─────────────────────────────────────────────────────────────────────
# Polynomial 클래스
# ─────────────────────────────────────────────────────────────────────

class Polynomial:
    """스칼라 체 위의 불변(immutable) 다항식.

    계수 튜플로 표현: coeffs = (c₀, c₁, c₂, ...) → c₀ + c₁x + c₂x² + ...

    모든 연산은 새 Polynomial을 반환한다.

    예시:
        >>> p = Polynomial([1, 2])  # 1 + 2x
        >>> q = Polynomial([3, 4])  # 3 + 4x
        >>> p + q                   # 4 + 6x
        >>> p * q                   # 3 + 10x + 8x²
    """

    __slots__ = ("_coeffs", "_field")

    def __init__(self, coeffs=None, field=FR):
        """다항식 생성.

        Args:
            coeffs: 정수 또는 체 원소의 시퀀스 [c₀, c₁, ...].
                    None이면 영 다항식을 생성한다.
            field: 계수가 속하는 체 클래스 (py_ecc FQ 하위 클래스)
        """
        converted = [_to_field(field, c) for c in (coeffs or ())]
        # 최고차 0 계수 제거: [1, 2, 0, 0] → [1, 2]
        while converted and converted[-1] == 0:
            converted.pop()
        object.__setattr__(self, "_coeffs", tuple(converted))
        object.__setattr__(self, "_field", field)

    def __setattr__(self, name, value):
        raise AttributeError("Polynomial은 변경할 수 없습니다")

    @property
    def coeffs(self):
        """계수 튜플 (c₀, c₁, ...). 영 다항식은 빈 튜플."""
        return self._coeffs

    @property
    def field(self):
        return self._field

    @property
    def degree(self):
        """다항식의 차수. 영 다항식은 -1."""
        return len(self._coeffs) - 1

    def is_zero(self):
        """영 다항식인지 확인."""
        return not self._coeffs

    def evaluate(self, point):
        """다항식을 주어진 점에서 평가한다 (Horner's method).

        Horner's method: p(x) = c₀ + x(c₁ + x(c₂ + ...))
        deg p 번의 곱셈과 덧셈으로 끝난다.

        Args:
            point: 평가할 점 (정수 또는 같은 체의 원소)

        Returns:
            p(point) (체 원소)

        예시:
            >>> Polynomial([1, 2, 3]).evaluate(2)  # 1 + 4 + 12 = FR(17)
        """
        point = _to_field(self._field, point)
        result = self._field(0)
        for coeff in reversed(self._coeffs):
            result = result * point + coeff
        return result

    def divide_by_linear(self, point):
        """(x - z)로 나눈 몫과 나머지를 조립제법으로 계산한다.

        p(x) = q(x)·(x - z) + r 이고, r = p(z)이다.
        최고차 계수부터 내려오며 bᵢ = cᵢ₊₁ + z·bᵢ₊₁ 를 누적한다.

        Args:
            point: z (정수 또는 같은 체의 원소)

        Returns:
            tuple: (몫 Polynomial q, 나머지 스칼라 r)

        예시:
            >>> p = Polynomial([-1, 0, 1])  # x² - 1
            >>> q, r = p.divide_by_linear(1)
            >>> q  # Poly(1 + 1*x)
            >>> r  # 0
        """
        z = _to_field(self._field, point)
        if self.is_zero():
            return Polynomial(field=self._field), self._field(0)

        quotient = [self._field(0)] * self.degree
        acc = self._coeffs[-1]
        for i in range(self.degree - 1, -1, -1):
            quotient[i] = acc
            acc = self._coeffs[i] + acc * z
        return Polynomial(quotient, self._field), acc

    def _coerce(self, other):
        if isinstance(other, Polynomial):
            if other._field.field_modulus != self._field.field_modulus:
                raise MalformedInput("서로 다른 체의 다항식은 연산할 수 없습니다")
            return other
        return Polynomial([other], self._field)

    def __add__(self, other):
        """다항식 덧셈: p(x) + q(x)."""
        other = self._coerce(other)
        a, b = self._coeffs, other._coeffs
        zero = self._field(0)
        result = []
        for i in range(max(len(a), len(b))):
            x = a[i] if i < len(a) else zero
            y = b[i] if i < len(b) else zero
            result.append(x + y)
        return Polynomial(result, self._field)

    def __radd__(self, other):
        return self.__add__(other)

    def __neg__(self):
        """다항식 부호 반전: -p(x)."""
        return Polynomial([-c for c in self._coeffs], self._field)

    def __sub__(self, other):
        """다항식 뺄셈: p(x) - q(x)."""
        return self + (-self._coerce(other))

    def __rsub__(self, other):
        return self._coerce(other) - self

    def __mul__(self, other):
        """다항식 곱셈: p(x) · q(x) 또는 스칼라곱.

        다항식 × 다항식: O(n·m) 나이브 곱셈
        다항식 × 스칼라: 각 계수에 스칼라를 곱함
        """
        if not isinstance(other, Polynomial):
            return self.scale(other)
        other = self._coerce(other)
        if self.is_zero() or other.is_zero():
            return Polynomial(field=self._field)
        result = [self._field(0)] * (len(self._coeffs) + len(other._coeffs) - 1)
        for i, a in enumerate(self._coeffs):
            for j, b in enumerate(other._coeffs):
                result[i + j] = result[i + j] + a * b
        return Polynomial(result, self._field)

    def __rmul__(self, other):
        return self.__mul__(other)

    def scale(self, scalar):
        """스칼라곱: scalar · p(x)."""
        scalar = _to_field(self._field, scalar)
        return Polynomial([c * scalar for c in self._coeffs], self._field)

    def __eq__(self, other):
        """다항식 동등 비교 (같은 체, 같은 계수)."""
        if not isinstance(other, Polynomial):
            return NotImplemented
        return (self._field.field_modulus == other._field.field_modulus
                and self._coeffs == other._coeffs)

    def __hash__(self):
        return hash((self._field.field_modulus, tuple(int(c) for c in self._coeffs)))

    def __repr__(self):
        terms = []
        for i, c in enumerate(self._coeffs):
            if c == 0:
                continue
            if i == 0:
                terms.append(str(int(c)))
            elif i == 1:
                terms.append(f"{int(c)}*x")
            else:
                terms.append(f"{int(c)}*x^{i}")
        return "Poly(" + " + ".join(terms) + ")" if terms else "Poly(0)"

    @classmethod
    def zero(cls, field=FR):
        """영 다항식 p(x) = 0."""
        return cls(field=field)

    @classmethod
    def linear(cls, point, field=FR):
        """일차 인수 x - z."""
        z = _to_field(field, point)
        return cls([-z, field(1)], field)

    @classmethod
    def from_bytes(cls, data, field=FR):
        """바이트열의 각 바이트를 계수로 삼는다.

        예시:
            >>> Polynomial.from_bytes(b"\\x01\\x02\\x03")  # 1 + 2x + 3x²
        """
        return cls(list(data), field)

    @classmethod
    def interpolate(cls, points, values, field=FR):
        """(xᵢ, yᵢ)를 지나는 차수 < n의 유일한 다항식을 Lagrange 보간으로 구한다.

        L_i(x) = ∏_{j≠i} (x - x_j) / (x_i - x_j)
        p(x) = Σ yᵢ · L_i(x)

        Args:
            points: 서로 다른 평가 점 [x₀, ..., x_{n-1}]
            values: 평가값 [y₀, ..., y_{n-1}]
            field: 계수 체

        Raises:
            MalformedInput: 길이가 다르거나 점이 중복된 경우
        """
        xs = [_to_field(field, x) for x in points]
        ys = [_to_field(field, y) for y in values]
        if len(xs) != len(ys):
            raise MalformedInput("점과 값의 개수가 다릅니다")
        if len({int(x) for x in xs}) != len(xs):
            raise MalformedInput("보간 점이 중복되었습니다")

        result = cls(field=field)
        for i, (xi, yi) in enumerate(zip(xs, ys)):
            basis = cls([1], field)
            denominator = field(1)
            for j, xj in enumerate(xs):
                if j == i:
                    continue
                basis = basis * cls.linear(xj, field)
                denominator = denominator * (xi - xj)
            result = result + basis.scale(yi / denominator)
        return result


def _to_field(field, value):
    """정수/체 원소를 ``field`` 원소로 바꾼다 (위수가 같아야 함)."""
    if type(value) is field:
        return value
    if isinstance(value, bool):
        raise MalformedInput(f"체 원소 자리에 bool이 들어왔습니다: {value!r}")
    if isinstance(value, int):
        return field(value)
    if getattr(value, "field_modulus", None) == field.field_modulus:
        return field(int(value))
    raise MalformedInput(f"위수 {field.field_modulus} 체의 원소가 아닙니다: {value!r}")
