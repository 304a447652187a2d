import logging

from flask import Flask, jsonify

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from kzg_routes import kzg_bp, init_kzg_bp

DB = TinyDB(storage=MemoryStorage)  # Memory DB
# DB = TinyDB('db.json')            # Storage DB

app = Flask(__name__)
app.secret_key = "key"

# 기본 설정. FLASK_ 접두사 환경변수로 덮어쓸 수 있다 (예: FLASK_KZG_CURVE=toy)
app.config.from_mapping(
    KZG_CURVE="bn128",
    KZG_TOY_MODULUS=101,
    KZG_DEFAULT_MAX_DEGREE=8,
    KZG_DEFAULT_SEED=None,
)
app.config.from_prefixed_env()

kzg_db = DB.table("kzg")
init_kzg_bp(kzg_db)
app.register_blueprint(kzg_bp)


@app.route("/")
def main():
    return jsonify({
        "service": "kzg10",
        "endpoints": sorted(
            str(rule) for rule in app.url_map.iter_rules() if str(rule).startswith("/kzg")
        ),
    })


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
    app.run(debug=True)
