#!/usr/bin/env python3
"""
otp_core.py — Core library cho sinh mã TOTP / HOTP.

Mục tiêu:
- Chỉ chứa hàm thuần (pure functions): mọi input (secret, tham số, thời điểm)
  được truyền vào tường minh, không cache gì giữa các lần gọi. Gọi song song
  từ nhiều thread vẫn an toàn.
- Không chứa argparse / vòng lặp refresh; ticker, CLI và web backend được
  xây trên các helper này.

Giải thuật (RFC 4226 / RFC 6238):
    counter = floor(now / period)
    mac     = HMAC-<alg>(key=secret, msg=counter as 8-byte big-endian)
    value   = DynamicTruncate(mac) & 0x7FFFFFFF
    code    = str(value mod 10^digits).zfill(digits)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple
import hashlib
import hmac
import logging
import struct

from core.errors import UnsupportedAlgorithm

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # chuẩn: 6 chữ số
DEFAULT_TIME_STEP = 30      # TOTP step (giây)
ALLOWED_DIGITS = (6, 8)
EXPIRY_WARNING_SECONDS = 5  # vài giây cuối của chu kỳ được đánh dấu sắp hết hạn
ERROR_PLACEHOLDER = "Error"


class Algorithm(Enum):
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digestmod(self):
        return _DIGESTS[self]

    @classmethod
    def from_name(cls, name) -> "Algorithm":
        """
        Chuyển 'sha256', 'SHA-256', Algorithm.SHA256 ... thành Algorithm.

        Raises:
            UnsupportedAlgorithm: với mọi giá trị khác
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise UnsupportedAlgorithm(name)
        key = name.strip().upper().replace("-", "")
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedAlgorithm(name) from None


_DIGESTS = {
    Algorithm.SHA1: hashlib.sha1,
    Algorithm.SHA256: hashlib.sha256,
    Algorithm.SHA512: hashlib.sha512,
}

DEFAULT_ALGORITHM = Algorithm.SHA1


@dataclass(frozen=True)
class TotpParameters:
    """Số chữ số, time step và thuật toán cho một secret. Immutable."""

    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_TIME_STEP
    algorithm: Algorithm = DEFAULT_ALGORITHM

    def __post_init__(self):
        if self.digits not in ALLOWED_DIGITS:
            raise ValueError(f"digits must be one of {ALLOWED_DIGITS}, got {self.digits!r}")
        if isinstance(self.period, bool) or not isinstance(self.period, int) or self.period <= 0:
            raise ValueError(f"period must be a positive integer, got {self.period!r}")
        object.__setattr__(self, "algorithm", Algorithm.from_name(self.algorithm))


@dataclass(frozen=True)
class WindowState:
    seconds_remaining: int
    fraction_remaining: float


@dataclass(frozen=True)
class TokenSnapshot:
    """Mọi thứ phần hiển thị cần cho một tick, lấy từ cùng một thời điểm."""

    code: str
    display: str
    seconds_remaining: int
    progress_fraction: float
    expiring: bool

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "display": self.display,
            "secondsRemaining": self.seconds_remaining,
            "progressFraction": self.progress_fraction,
            "expiring": self.expiring,
        }


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Chuyển counter sang message 8-byte big-endian như RFC 4226 yêu cầu.

    Ví dụ: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    Áp dụng dynamic truncation theo RFC 4226.

    - offset = last_byte & 0x0F
    - đọc 4 byte từ offset thành số nguyên big-endian không dấu
    - clear bit cao nhất, còn lại số 31-bit

    Dùng được cho digest 20, 32 và 64 byte (offset + 4 <= 19 < 20).
    """
    offset = hmac_digest[-1] & 0x0F
    (value,) = struct.unpack(">I", hmac_digest[offset:offset + 4])
    return value & 0x7FFFFFFF


def hotp(secret: bytes, counter: int, digits: int = DEFAULT_DIGITS,
         algorithm=DEFAULT_ALGORITHM) -> str:
    """
    Sinh mã HOTP theo RFC 4226.

    Arguments:
        secret: key bytes (đã giải mã Base32)
        counter: integer counter (không âm)
        digits: số chữ số OTP
        algorithm: Algorithm hoặc tên thuật toán

    Trả về:
        str: mã zero-padded, đúng `digits` ký tự

    Raises:
        UnsupportedAlgorithm: nếu algorithm không phải SHA1/SHA256/SHA512
    """
    alg = Algorithm.from_name(algorithm)
    digest = hmac.new(secret, int_to_bytes(counter), alg.digestmod).digest()
    dbc = dynamic_truncate(digest)
    otp_val = dbc % (10 ** digits)
    return str(otp_val).zfill(digits)


def generate(secret: bytes, digits: int, period: int, algorithm, now: int) -> str:
    """
    Sinh mã TOTP tại thời điểm `now` (RFC 6238, T0 = 0).

    Arguments:
        secret: key bytes
        digits: 6 hoặc 8
        period: time step (giây)
        algorithm: Algorithm hoặc tên thuật toán
        now: Unix time (giây)

    Trả về:
        str: mã OTP, dài `digits` ký tự
    """
    counter = int(now) // period
    logger.debug("TOTP: time=%s, period=%s, counter=%s, alg=%s", now, period, counter, algorithm)
    return hotp(secret, counter, digits, algorithm)


def window_state(period: int, now: int) -> WindowState:
    """Số giây còn lại trong time step hiện tại và tỉ lệ so với period."""
    remaining = period - (int(now) % period)
    return WindowState(remaining, remaining / period)


def totp(secret: bytes, params: TotpParameters, now: int) -> Tuple[str, int]:
    """
    Tiện ích: (code, remaining_seconds) cho một thời điểm.
    """
    code = generate(secret, params.digits, params.period, params.algorithm, now)
    return code, window_state(params.period, now).seconds_remaining


def format_for_display(code: str) -> str:
    """
    Tách mã thành hai nhóm cho dễ đọc.

    "123456" -> "123 456", "12345678" -> "1234 5678", độ dài khác giữ nguyên.
    """
    if len(code) == 6:
        return f"{code[:3]} {code[3:]}"
    if len(code) == 8:
        return f"{code[:4]} {code[4:]}"
    return code


def snapshot(secret: bytes, params: TotpParameters, now: int) -> TokenSnapshot:
    """
    Tính mã và window state từ cùng một thời điểm đã chốt.
    """
    code = generate(secret, params.digits, params.period, params.algorithm, now)
    window = window_state(params.period, now)
    return TokenSnapshot(
        code=code,
        display=format_for_display(code),
        seconds_remaining=window.seconds_remaining,
        progress_fraction=window.fraction_remaining,
        expiring=window.seconds_remaining <= EXPIRY_WARNING_SECONDS,
    )


def error_snapshot(params: TotpParameters, now: int) -> TokenSnapshot:
    """Placeholder hiển thị khi sinh mã lỗi; đồng hồ đếm ngược vẫn chạy."""
    window = window_state(params.period, now)
    return TokenSnapshot(
        code=ERROR_PLACEHOLDER,
        display=ERROR_PLACEHOLDER,
        seconds_remaining=window.seconds_remaining,
        progress_fraction=window.fraction_remaining,
        expiring=window.seconds_remaining <= EXPIRY_WARNING_SECONDS,
    )
