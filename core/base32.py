"""
base32.py — Giải mã secret Base32 (bảng chữ cái RFC 4648: A-Z, 2-7).

Secret do user nhập thường "bẩn": chữ thường, cách nhau theo nhóm 4 ký tự,
có hoặc không có padding '='. decode() chuẩn hóa hết rồi chuyển text thành
key bytes cho bước HMAC.

Giải mã đi qua bước trung gian nibble (hex):
    ký tự -> nhóm 5 bit -> chuỗi bit -> nibble 4 bit -> hex -> bytes
Các bit không đủ một nibble bị bỏ, nibble cuối không đủ một byte cũng bị bỏ.
Với secret chuẩn, kết quả giống hệt base64.b32decode.

Ký tự ngoài bảng chữ cái:
- mặc định         : raise InvalidCharacter.
- skip_invalid=True: bỏ qua ký tự đó (log warning). Tùy chọn riêng, không
                     dùng cho luồng sinh mã thông thường.
"""

import logging
import re

from core.errors import InvalidCharacter

logger = logging.getLogger(__name__)

# --- Config / constants ----------------------------------------------------
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_VALUES = {ch: i for i, ch in enumerate(ALPHABET)}
_WHITESPACE = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Bỏ whitespace, viết hoa, bỏ padding '=' ở cuối.

    Ví dụ: normalize("jbsw y3dp ====") -> "JBSWY3DP"
    """
    return _WHITESPACE.sub("", text).upper().rstrip("=")


def is_canonical(text: str) -> bool:
    """True nếu text (sau khi chuẩn hóa) chỉ gồm ký tự Base32."""
    cleaned = normalize(text)
    return bool(cleaned) and all(ch in _VALUES for ch in cleaned)


def _to_bits(cleaned: str, skip_invalid: bool) -> str:
    bits = []
    skipped = 0
    for position, ch in enumerate(cleaned):
        value = _VALUES.get(ch)
        if value is None:
            if not skip_invalid:
                raise InvalidCharacter(ch, position)
            skipped += 1
            continue
        # MSB trước, 5 bit mỗi ký tự
        bits.append(format(value, "05b"))
    if skipped:
        logger.warning("Skipped %d non-Base32 character(s) in secret", skipped)
    return "".join(bits)


def hex_decode(text: str, skip_invalid: bool = False) -> str:
    """
    Giải mã Base32 thành chuỗi hex, mỗi nibble 4 bit là một chữ số hex.

    Chuỗi hex có thể có độ dài lẻ: chỉ nibble không đủ 4 bit bị bỏ.

    Arguments:
        text: secret Base32 do user nhập
        skip_invalid: bỏ qua ký tự lạ thay vì raise

    Trả về:
        str: chữ số hex viết thường

    Raises:
        InvalidCharacter: gặp ký tự ngoài bảng chữ cái (khi skip_invalid=False)
    """
    bits = _to_bits(normalize(text), skip_invalid)
    usable = len(bits) - len(bits) % 4
    return "".join(
        format(int(bits[i:i + 4], 2), "x") for i in range(0, usable, 4)
    )


def decode(text: str, skip_invalid: bool = False) -> bytes:
    """
    Giải mã secret Base32 thành key bytes.

    Steps:
    1. normalize() text
    2. tra giá trị 5 bit của từng ký tự
    3. gom bit thành nibble, render ra hex
    4. chuyển từng cặp hex thành byte (nibble lẻ cuối cùng bị bỏ)

    Arguments:
        text: secret Base32 do user nhập
        skip_invalid: bỏ qua ký tự lạ thay vì raise

    Trả về:
        bytes: shared key (có thể rỗng nếu input không có gì giải mã được)

    Raises:
        InvalidCharacter: gặp ký tự ngoài bảng chữ cái (khi skip_invalid=False)
    """
    hex_key = hex_decode(text, skip_invalid)
    if len(hex_key) % 2:
        hex_key = hex_key[:-1]
    key = bytes.fromhex(hex_key)
    logger.debug("Decoded Base32 secret into %d key bytes", len(key))
    return key
