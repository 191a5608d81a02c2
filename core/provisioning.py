"""
provisioning.py — Chuyển input user dán vào thành ActiveToken.

Input được chấp nhận:
- secret Base32 thô ("JBSW Y3DP EHPK 3PXP"), dùng tham số mặc định
- otpauth:// URI:
      otpauth://totp/Issuer:alice?secret=BASE32&digits=8&period=60&algorithm=SHA256

Tham số query được xử lý "dễ dãi": digits khác 6/8, period không phải số
nguyên dương, algorithm lạ -> quay về mặc định (6, 30, SHA1). Chỉ thiếu
secret mới là lỗi đối với URI.

Chế độ strict / lenient:
- strict=True : secret có ký tự ngoài Base32 bị từ chối ngay khi parse.
- strict=False: (mặc định) secret được nhận nguyên trạng; lỗi giải mã chỉ
                xuất hiện khi sinh mã, và ticker hiển thị placeholder lỗi.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlparse
import logging

from core import base32
from core.errors import InvalidUri, MissingSecret, TokenError, UnsupportedAlgorithm
from core.otp_core import (
    ALLOWED_DIGITS,
    DEFAULT_ALGORITHM,
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    Algorithm,
    TotpParameters,
)

logger = logging.getLogger(__name__)

URI_SCHEME = "otpauth"
URI_PREFIX = URI_SCHEME + "://"


@dataclass(frozen=True)
class ActiveToken:
    """
    Secret (đã chuẩn hóa, chưa giải mã) + tham số đi kèm.

    `secret` giải mã lại mỗi lần truy cập; secret không hợp lệ sẽ raise
    InvalidCharacter tại thời điểm sinh mã chứ không phải lúc parse.
    """

    secret_text: str
    params: TotpParameters

    @property
    def secret(self) -> bytes:
        return base32.decode(self.secret_text)

    def __repr__(self):
        # không bao giờ in secret ra
        return f"ActiveToken(secret=<{len(self.secret_text)} chars>, params={self.params!r})"


def _first(query: dict, key: str) -> Optional[str]:
    values = query.get(key)
    if not values:
        return None
    return values[0]


def _parse_digits(raw: Optional[str]) -> int:
    try:
        digits = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_DIGITS
    return digits if digits in ALLOWED_DIGITS else DEFAULT_DIGITS


def _parse_period(raw: Optional[str]) -> int:
    try:
        period = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_TIME_STEP
    return period if period > 0 else DEFAULT_TIME_STEP


def _parse_algorithm(raw: Optional[str]) -> Algorithm:
    if raw is None:
        return DEFAULT_ALGORITHM
    try:
        return Algorithm.from_name(raw)
    except UnsupportedAlgorithm:
        logger.info("Unknown algorithm %r in URI, using %s", raw, DEFAULT_ALGORITHM.value)
        return DEFAULT_ALGORITHM


def parse_uri(uri: str):
    """
    Tách (secret_text, TotpParameters) từ otpauth:// URI.

    Raises:
        InvalidUri: text không phải otpauth URI parse được
        MissingSecret: URI không có tham số secret (hoặc secret rỗng)
    """
    try:
        parsed = urlparse(uri)
        query = parse_qs(parsed.query)
    except ValueError as e:
        raise InvalidUri(f"Invalid otpauth URI: {e}") from e
    if parsed.scheme.lower() != URI_SCHEME:
        raise InvalidUri("Not an otpauth URI")

    secret = _first(query, "secret")
    if not secret or not secret.strip():
        raise MissingSecret("otpauth URI has no secret parameter")

    params = TotpParameters(
        digits=_parse_digits(_first(query, "digits")),
        period=_parse_period(_first(query, "period")),
        algorithm=_parse_algorithm(_first(query, "algorithm")),
    )
    return secret, params


def parse_input(text: str, strict: bool = False) -> ActiveToken:
    """
    Parse secret Base32 thô hoặc otpauth URI thành ActiveToken.

    Arguments:
        text: input của user
        strict: từ chối ngay secret có ký tự ngoài Base32

    Raises:
        TokenError (InvalidUri, MissingSecret, InvalidCharacter khi strict)
    """
    text = (text or "").strip()
    if not text:
        raise MissingSecret("No secret given")

    if text.lower().startswith(URI_PREFIX):
        secret_text, params = parse_uri(text)
    else:
        secret_text, params = text, TotpParameters()

    cleaned = base32.normalize(secret_text)
    if strict:
        base32.decode(cleaned)
    elif not base32.is_canonical(cleaned):
        logger.info("Secret is not canonical Base32, code generation will fail")
    logger.debug("Parsed input: %d secret chars, %r", len(cleaned), params)
    return ActiveToken(secret_text=cleaned, params=params)


def try_parse_input(text: str, strict: bool = False) -> Optional[ActiveToken]:
    """
    Helper ở biên: giống parse_input() nhưng trả về None thay vì raise.

    None nghĩa là "không có mã": caller ẩn phần hiển thị.
    """
    try:
        return parse_input(text, strict=strict)
    except TokenError as e:
        logger.warning("Ignoring input: %s", e)
        return None
