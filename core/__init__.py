"""
core package
============

Sinh mã TOTP (RFC 6238) dựa trên HOTP (RFC 4226), dùng cho một viewer
hiển thị mã hiện tại và số giây mã còn hiệu lực.

──────────────────────────────────────────────
Giải thuật cốt lõi
──────────────────────────────────────────────
- Base32 decoding:
  text của user -> chuẩn hóa (bỏ whitespace, viết hoa, bỏ '=') -> key bytes.

- TOTP:
  counter = floor(now / period), code = HOTP(key, counter).
  → Mặc định: 6 chữ số, period 30 giây, HMAC-SHA1.

- Dynamic truncation:
  Lấy 4 byte từ HMAC tại offset (last byte & 0x0F), xóa bit cao nhất,
  rồi mod 10^digits và zero-pad.

──────────────────────────────────────────────
Ví dụ sử dụng nhanh
──────────────────────────────────────────────
>>> from core import parse_input, snapshot
>>> token = parse_input("otpauth://totp/demo?secret=GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ&digits=8")
>>> snapshot(token.secret, token.params, 59).code
'94287082'
"""
from core.base32 import decode, hex_decode, normalize
from core.errors import (
    InvalidCharacter,
    InvalidUri,
    MissingSecret,
    TokenError,
    UnsupportedAlgorithm,
)
from core.otp_core import (
    Algorithm,
    TokenSnapshot,
    TotpParameters,
    WindowState,
    format_for_display,
    generate,
    hotp,
    snapshot,
    totp,
    window_state,
)
from core.provisioning import ActiveToken, parse_input, try_parse_input
from core.ticker import TokenTicker
