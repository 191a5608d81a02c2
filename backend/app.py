"""
FLASK APP MAIN ENTRY POINT - OTP VIEWER BACKEND
===============================================

Đây là file chính để khởi chạy OTP Viewer Backend API Server.
File này thiết lập Flask app, cấu hình CORS, và đăng ký các API routes.

CÁC TÍNH NĂNG CHÍNH
- create_app() factory, cấu hình từ backend.config.Config
- CORS enabled cho frontend chạy trên domain/port khác
- Trang chủ liệt kê các API endpoints
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from backend.config import Config

logger = logging.getLogger(__name__)


def create_app(config=None) -> Flask:
    """
    Tạo Flask app.

    Arguments:
        config: class/object cấu hình (mặc định: Config)
    """
    app = Flask(__name__)
    app.config.from_object(config or Config)

    # BẬT CORS: cho phép frontend (khác origin) gọi API
    CORS(app, origins=app.config["CORS_ORIGINS"])

    from backend.routes import token_bp
    app.register_blueprint(token_bp)

    @app.route('/', methods=['GET'])
    def index():
        """TRANG CHỦ - DANH SÁCH API ENDPOINTS"""
        return jsonify({
            "service": "otp-viewer",
            "endpoints": {
                "POST /api/token": "current code for a Base32 secret or otpauth URI",
                "POST /api/decode": "hex key of a Base32 secret",
                "GET /api/health": "liveness check",
            },
        })

    logger.debug("App created (strict_decode=%s)", app.config["STRICT_DECODE"])
    return app


app = create_app()


# KHỞI CHẠY SERVER
# Chỉ chạy khi file được execute trực tiếp (không phải import)
if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host='0.0.0.0', port=5000)
