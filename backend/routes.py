"""
OTP VIEWER API ROUTES - FLASK BLUEPRINT

Đây là file chứa các API endpoint của OTP viewer.
Mọi endpoint nhận secret trong request body; server không lưu gì cả.

VÍ DỤ:
curl -X POST http://localhost:5000/api/token -H "Content-Type: application/json" -d '{"input": "JBSWY3DPEHPK3PXP"}'
curl -X POST http://localhost:5000/api/decode -H "Content-Type: application/json" -d '{"secret": "JBSWY3DP"}'
"""

import logging
import time

from flask import Blueprint, current_app, jsonify, request

from backend.config import as_bool
from core.base32 import hex_decode
from core.errors import TokenError
from core.otp_core import snapshot, error_snapshot
from core.provisioning import try_parse_input

logger = logging.getLogger(__name__)

# Blueprint cho các API token, prefix /api
token_bp = Blueprint('token', __name__, url_prefix='/api')


def _json_object():
    """Body JSON dạng object, hoặc None nếu body không phải JSON object."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        return None
    return data


@token_bp.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "ok"})


@token_bp.route('/token', methods=['POST'])
def get_token():
    """
    LẤY MÃ TOTP HIỆN TẠI

      curl -X POST http://localhost:5000/api/token -H "Content-Type: application/json" -d '{"input": "JBSWY3DP"}'

    Input (JSON body):
      {
        "input": "JBSWY3DP...",   # BẮT BUỘC - secret Base32 hoặc otpauth:// URI
        "time": 1700000000,       # Unix time, mặc định: bây giờ
        "strict": false           # từ chối secret có ký tự ngoài Base32
      }

    Output:
      {"active": true, "code": "123456", "display": "123 456",
       "secondsRemaining": 17, "progressFraction": 0.56, "expiring": false,
       "digits": 6, "period": 30, "algorithm": "SHA1"}
      {"active": false}   # input không dùng được -> ẩn mã
    Secret không giải mã được (chế độ lenient) trả về code "Error".
    """
    data = _json_object()
    if data is None:
        return jsonify({"error": "JSON body must be an object"}), 400
    text = data.get('input')
    if not isinstance(text, str):
        return jsonify({"error": "input is required"}), 400

    strict = as_bool(data.get('strict'), current_app.config['STRICT_DECODE'])
    token = try_parse_input(text, strict=strict)
    if token is None:
        return jsonify({"active": False})

    raw_time = data.get('time')
    try:
        now = int(raw_time) if raw_time is not None else int(time.time())
    except (TypeError, ValueError):
        return jsonify({"error": "time must be an integer"}), 400

    params = token.params
    try:
        snap = snapshot(token.secret, params, now)
    except Exception:
        logger.exception("Token generation failed")
        snap = error_snapshot(params, now)

    body = {"active": True}
    body.update(snap.to_dict())
    body.update({
        "digits": params.digits,
        "period": params.period,
        "algorithm": params.algorithm.value,
    })
    return jsonify(body)


@token_bp.route('/decode', methods=['POST'])
def decode_secret():
    """
    KEY HEX CỦA SECRET BASE32

    Input: {"secret": "JBSWY3DP", "skipInvalid": false}
    Output: {"hex": "48656c6c6f"}
    Ký tự ngoài Base32 -> 400, trừ khi skipInvalid = true.
    """
    data = _json_object()
    if data is None:
        return jsonify({"error": "JSON body must be an object"}), 400
    secret = data.get('secret')
    if not isinstance(secret, str):
        return jsonify({"error": "secret is required"}), 400
    try:
        return jsonify({"hex": hex_decode(secret, skip_invalid=as_bool(data.get('skipInvalid')))})
    except TokenError as e:
        return jsonify({"error": str(e)}), 400
