"""
KZG 데이터 직렬화/역직렬화 헬퍼
=================================

TinyDB와 JSON 응답에 담을 수 있는 형태로 KZG 객체를 변환한다.
스칼라, G1/G2 점, Polynomial, SRS, OpeningClaim 등.

  - 스칼라: 10진 문자열
  - bn128 점: 좌표 문자열 리스트, 무한원점은 None
  - toy 점: {"group": ..., "exp": ...}
"""

from py_ecc import bn128
from py_ecc.fields import bn128_FQ as FQ

from kzg10.batch import OpeningClaim
from kzg10.errors import MalformedInput
from kzg10.field import ToyPoint, get_curve
from kzg10.polynomial import Polynomial
from kzg10.srs import SRS, ProvingKey, VerificationKey


# ─── 스칼라 ───

def serialize_scalar(val):
    """스칼라 → str(int)"""
    return str(int(val))


def deserialize_scalar(curve, s):
    """str(int) 또는 int → 스칼라 체 원소"""
    try:
        return curve.scalar(int(s))
    except (TypeError, ValueError):
        raise MalformedInput(f"스칼라로 읽을 수 없습니다: {s!r}") from None


def serialize_scalar_list(lst):
    return [serialize_scalar(v) for v in lst]


def deserialize_scalar_list(curve, data):
    if not isinstance(data, list):
        raise MalformedInput("스칼라 리스트가 아닙니다")
    return [deserialize_scalar(curve, s) for s in data]


# ─── G1 / G2 점 ───

def _coordinate(value):
    """좌표 문자열 → 정규형 정수 (0 ≤ c < p가 아니면 MalformedInput)"""
    c = int(value)
    if not 0 <= c < bn128.field_modulus:
        raise MalformedInput(f"좌표가 체 범위를 벗어났습니다: {value!r}")
    return c


def serialize_g1(point):
    """G1 point → [str, str], toy dict, 또는 None"""
    if point is None:
        return None
    if isinstance(point, ToyPoint):
        return {"group": point.group, "exp": str(point.exponent)}
    return [str(int(point[0])), str(int(point[1]))]


def deserialize_g1(curve, data):
    """[str, str] / toy dict / None → G1 point (군 소속 검사 포함)"""
    try:
        if curve.name == "toy":
            point = ToyPoint(data["group"], int(data["exp"]), curve.order)
        elif data is None:
            point = None
        else:
            point = (FQ(_coordinate(data[0])), FQ(_coordinate(data[1])))
    except (TypeError, ValueError, KeyError, IndexError):
        raise MalformedInput(f"G1 점으로 읽을 수 없습니다: {data!r}") from None
    if not curve.is_g1(point):
        raise MalformedInput("G1 위의 점이 아닙니다")
    return point


def serialize_g2(point):
    """G2 point → [[str,str],[str,str]], toy dict, 또는 None"""
    if point is None:
        return None
    if isinstance(point, ToyPoint):
        return {"group": point.group, "exp": str(point.exponent)}
    return [
        [str(int(point[0].coeffs[0])), str(int(point[0].coeffs[1]))],
        [str(int(point[1].coeffs[0])), str(int(point[1].coeffs[1]))]
    ]


def deserialize_g2(curve, data):
    """[[str,str],[str,str]] / toy dict / None → G2 point"""
    try:
        if curve.name == "toy":
            return ToyPoint(data["group"], int(data["exp"]), curve.order)
        if data is None:
            return None
        return (
            bn128.FQ2([_coordinate(data[0][0]), _coordinate(data[0][1])]),
            bn128.FQ2([_coordinate(data[1][0]), _coordinate(data[1][1])])
        )
    except (TypeError, ValueError, KeyError, IndexError):
        raise MalformedInput(f"G2 점으로 읽을 수 없습니다: {data!r}") from None


# ─── Polynomial ───

def serialize_poly(poly):
    """Polynomial → list of str (계수)"""
    return serialize_scalar_list(poly.coeffs)


def deserialize_poly(curve, data):
    """list of str → Polynomial"""
    return Polynomial(deserialize_scalar_list(curve, data), curve.scalar_field)


# ─── SRS ───

def serialize_srs(srs):
    """SRS → dict"""
    vk = srs.verification_key
    return {
        "curve": srs.curve.name,
        "modulus": str(srs.curve.order),
        "g1_powers": [serialize_g1(p) for p in srs.g1_powers],
        "g1": serialize_g1(vk.g1),
        "g2": serialize_g2(vk.g2),
        "s_g2": serialize_g2(vk.s_g2),
    }


def deserialize_srs(data):
    """dict → SRS (ProvingKey/VerificationKey 생성자가 군 소속을 다시 검사)"""
    curve = get_curve(data["curve"], int(data["modulus"]))
    proving_key = ProvingKey(curve, [deserialize_g1(curve, p) for p in data["g1_powers"]])
    verification_key = VerificationKey(
        curve,
        deserialize_g1(curve, data["g1"]),
        deserialize_g2(curve, data["g2"]),
        deserialize_g2(curve, data["s_g2"]),
    )
    return SRS(proving_key, verification_key)


# ─── OpeningClaim ───

def serialize_claim(claim):
    """OpeningClaim → dict"""
    commitment, point, value, proof = claim
    return {
        "commitment": serialize_g1(commitment),
        "point": serialize_scalar(point),
        "value": serialize_scalar(value),
        "proof": serialize_g1(proof),
    }


def deserialize_claim(curve, data):
    """dict → OpeningClaim"""
    try:
        return OpeningClaim(
            deserialize_g1(curve, data["commitment"]),
            deserialize_scalar(curve, data["point"]),
            deserialize_scalar(curve, data["value"]),
            deserialize_g1(curve, data["proof"]),
        )
    except (TypeError, KeyError):
        raise MalformedInput(f"주장으로 읽을 수 없습니다: {data!r}") from None


# ─── UI 표시용 축약 ───

def _shorten(s):
    if len(s) <= 10:
        return s
    return s[:4] + "..." + s[-4:]


def g1_short(point):
    """G1 point → 축약 문자열"""
    if point is None:
        return "∞"
    if isinstance(point, ToyPoint):
        return f"{point.exponent}·g1"
    return f"({_shorten(str(int(point[0])))}, {_shorten(str(int(point[1])))})"


def scalar_short(val):
    """스칼라 → 축약 문자열"""
    return _shorten(str(int(val)))
