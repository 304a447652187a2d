"""
KZG Flask Blueprint — KZG 커밋먼트 실습 엔드포인트
=====================================================

setup → commit → open → verify → verify-batch 흐름을 JSON으로 제공한다.
중간 결과(SRS, 다항식, 마지막 열기 주장)는 TinyDB에 저장하고,
각 요청은 필요한 값을 DB에서 역직렬화해서 코어 함수를 호출한다.

  POST /kzg/setup         SRS 생성 (seed가 있으면 결정론적, 테스트 전용)
  GET  /kzg/srs           현재 SRS 요약
  POST /kzg/commit        다항식 커밋 (coeffs 또는 data 문자열)
  POST /kzg/open          저장된 (또는 주어진) 다항식을 점에서 열기
  POST /kzg/verify        단일 열기 검증
  POST /kzg/verify-batch  다중 주장 일괄 검증
  POST /kzg/clear         모든 KZG 데이터 삭제
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from tinydb import Query

from kzg10.batch import verify_batch
from kzg10.errors import KZGError, MalformedInput
from kzg10.field import get_curve
from kzg10.kzg import commit, create_opening
from kzg10.polynomial import Polynomial
from kzg10.srs import SRS
from kzg10.transcript import batch_coefficients
from kzg10.verifier import verify_opening

from kzg_serializers import (
    deserialize_scalar,
    serialize_scalar_list, deserialize_scalar_list,
    serialize_g1,
    serialize_poly, deserialize_poly,
    serialize_srs, deserialize_srs,
    serialize_claim, deserialize_claim,
    g1_short, scalar_short,
)

logger = logging.getLogger(__name__)

kzg_bp = Blueprint('kzg', __name__, url_prefix='/kzg')

DATA = Query()

# DB는 app.py에서 주입
DB = None


class SetupIncomplete(KZGError):
    """SRS가 만들어지기 전에 커밋/열기/검증을 요청했다."""

    kind = "SetupIncomplete"


def init_kzg_bp(db):
    """app.py에서 DB를 주입받는다."""
    global DB
    DB = db


# ─── DB 헬퍼 ───

def db_get(key):
    """DB에서 키로 데이터를 조회한다."""
    result = DB.search(DATA.type == key)
    if not result:
        return None
    return result[0].get("data")


def db_set(key, data):
    """DB에 키로 데이터를 저장한다."""
    DB.upsert({"type": key, "data": data}, DATA.type == key)


def db_remove_prefix(prefix):
    """prefix로 시작하는 모든 키를 삭제한다."""
    DB.remove(DATA.type.test(lambda t: t.startswith(prefix)))


def load_srs():
    srs_raw = db_get("kzg.srs.raw")
    if not srs_raw:
        raise SetupIncomplete("먼저 /kzg/setup으로 SRS를 생성하세요")
    return deserialize_srs(srs_raw)


def request_json():
    """요청 본문 JSON 객체. 본문이 없으면 빈 dict, 객체가 아니면 MalformedInput."""
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise MalformedInput("요청 본문은 JSON 객체여야 합니다")
    return body


@kzg_bp.errorhandler(KZGError)
def handle_kzg_error(error):
    """KZG 오류 → 400 JSON."""
    return jsonify({"error": error.kind, "message": str(error)}), 400


# ──────────────────────────────────────────────────────────────
# Setup
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/setup", methods=["POST"])
def setup_srs():
    """SRS를 생성한다."""
    body = request_json()
    config = current_app.config
    curve = get_curve(body.get("curve", config["KZG_CURVE"]),
                      body.get("modulus", config["KZG_TOY_MODULUS"]))
    max_degree = body.get("max_degree", config["KZG_DEFAULT_MAX_DEGREE"])
    seed = body.get("seed", config["KZG_DEFAULT_SEED"])

    if seed is None:
        srs = SRS.generate(max_degree, curve=curve)
    else:
        srs = SRS.generate_deterministic(max_degree, seed, curve=curve)

    db_set("kzg.srs.raw", serialize_srs(srs))

    # 표시용 정보
    srs_info = {
        "curve": curve.name,
        "max_degree": srs.max_degree,
        "deterministic": seed is not None,
        "g1_count": len(srs.g1_powers),
        "g1_samples": [g1_short(p) for p in srs.g1_powers[:5]],
    }
    db_set("kzg.srs.info", srs_info)

    # SRS 변경 시 하위 데이터 클리어
    db_remove_prefix("kzg.poly.")
    db_remove_prefix("kzg.claim.")

    return jsonify(srs_info)


@kzg_bp.route("/srs")
def srs_info():
    """현재 SRS 요약."""
    info = db_get("kzg.srs.info")
    if info is None:
        raise SetupIncomplete("SRS가 없습니다")
    return jsonify(info)


# ──────────────────────────────────────────────────────────────
# Commit / Open
# ──────────────────────────────────────────────────────────────

def request_polynomial(body, srs):
    """요청 본문의 coeffs/data 또는 저장된 다항식을 읽는다."""
    field = srs.curve.scalar_field
    if "coeffs" in body:
        return Polynomial(deserialize_scalar_list(srs.curve, body["coeffs"]), field)
    if "data" in body:
        return Polynomial.from_bytes(str(body["data"]).encode("utf-8"), field)
    stored = db_get("kzg.poly.coeffs")
    if stored is None:
        raise SetupIncomplete("커밋된 다항식이 없습니다")
    return deserialize_poly(srs.curve, stored)


@kzg_bp.route("/commit", methods=["POST"])
def commit_polynomial():
    """다항식을 커밋한다."""
    srs = load_srs()
    poly = request_polynomial(request_json(), srs)
    commitment = commit(poly, srs)

    db_set("kzg.poly.coeffs", serialize_poly(poly))
    db_remove_prefix("kzg.claim.")

    return jsonify({
        "degree": poly.degree,
        "commitment": serialize_g1(commitment),
        "commitment_short": g1_short(commitment),
    })


@kzg_bp.route("/open", methods=["POST"])
def open_polynomial():
    """다항식을 한 점에서 연다."""
    srs = load_srs()
    body = request_json()
    poly = request_polynomial(body, srs)
    if "point" not in body:
        raise MalformedInput("열 점(point)이 필요합니다")
    point = deserialize_scalar(srs.curve, body["point"])

    value, proof = create_opening(poly, point, srs)
    claim = serialize_claim((commit(poly, srs), point, value, proof))
    db_set("kzg.claim.last", claim)

    claim["value_short"] = scalar_short(value)
    claim["proof_short"] = g1_short(proof)
    return jsonify(claim)


# ──────────────────────────────────────────────────────────────
# Verify
# ──────────────────────────────────────────────────────────────

@kzg_bp.route("/verify", methods=["POST"])
def verify_claim():
    """단일 열기 주장을 검증한다 (본문이 비면 마지막 주장)."""
    srs = load_srs()
    body = request_json() or db_get("kzg.claim.last")
    if not body:
        raise SetupIncomplete("검증할 주장이 없습니다")
    commitment, point, value, proof = deserialize_claim(srs.curve, body)

    result = verify_opening(commitment, proof, point, value, srs.verification_key)
    logger.info("verify: point=%s, result=%s", scalar_short(point), result)
    return jsonify({"result": result})


@kzg_bp.route("/verify-batch", methods=["POST"])
def verify_claims():
    """여러 주장을 일괄 검증한다.

    coefficients가 없으면 주장들로부터 Fiat-Shamir 계수를 유도한다.
    """
    srs = load_srs()
    body = request_json()
    claims = [deserialize_claim(srs.curve, c) for c in body.get("claims", [])]
    if "coefficients" in body:
        coefficients = deserialize_scalar_list(srs.curve, body["coefficients"])
    else:
        coefficients = batch_coefficients(claims, srs.curve)

    result = verify_batch(srs.verification_key, claims, coefficients)
    logger.info("verify-batch: claims=%d, result=%s", len(claims), result)
    return jsonify({
        "result": result,
        "coefficients": serialize_scalar_list(coefficients),
    })


@kzg_bp.route("/clear", methods=["POST"])
def clear_all():
    """모든 KZG 데이터를 클리어한다."""
    db_remove_prefix("kzg.")
    return jsonify({"cleared": True})
