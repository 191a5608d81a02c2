"""
Cấu hình backend, đọc từ biến môi trường (và file .env nếu có).

    OTP_VIEWER_ENV_FILE       đường dẫn file .env (mặc định: tự tìm .env)
    OTP_VIEWER_SECRET_KEY     Flask secret key
    OTP_VIEWER_STRICT_DECODE  "1"/"true" để từ chối secret không phải Base32
    OTP_VIEWER_CORS_ORIGINS   danh sách origin cách nhau bởi dấu phẩy, mặc định "*"
"""
import os

from dotenv import load_dotenv

# Đọc .env trước khi class Config lấy giá trị từ os.environ
load_dotenv(os.environ.get("OTP_VIEWER_ENV_FILE"))

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def as_bool(value, default: bool = False) -> bool:
    """
    Chuyển giá trị từ env / JSON thành bool.

    bool giữ nguyên; chuỗi "1"/"true"/"yes"/"on" -> True, "0"/"false"/"no"/"off" -> False
    (không phân biệt hoa thường); còn lại (None, số, chuỗi lạ) -> default.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE:
            return True
        if lowered in _FALSE:
            return False
    return default


def _env_bool(key: str, default: bool = False) -> bool:
    return as_bool(os.environ.get(key), default)


def _env_list(key: str, default: str) -> list:
    raw = os.environ.get(key, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config:
    SECRET_KEY = os.environ.get("OTP_VIEWER_SECRET_KEY", "otp_viewer_dev_key")
    STRICT_DECODE = _env_bool("OTP_VIEWER_STRICT_DECODE")
    CORS_ORIGINS = _env_list("OTP_VIEWER_CORS_ORIGINS", "*")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret-key"
