"""
errors.py — Các exception mà core của OTP viewer raise ra.

Tất cả kế thừa TokenError (bản thân là ValueError) để các lớp ở biên
(ticker, CLI, HTTP routes) chỉ cần bắt một kiểu và chuyển sang trạng thái
"không có mã" thay vì crash.
"""


class TokenError(ValueError):
    """Lớp cha cho mọi lỗi về secret / tham số."""


class InvalidUri(TokenError):
    """otpauth:// URI không parse được."""


class MissingSecret(TokenError):
    """Input (hoặc URI) không có secret."""


class InvalidCharacter(TokenError):
    """Secret chứa ký tự ngoài bảng chữ cái Base32."""

    def __init__(self, char: str, position: int):
        super().__init__(f"Invalid Base32 character {char!r} at position {position}")
        self.char = char
        self.position = position


class UnsupportedAlgorithm(TokenError):
    """Thuật toán HMAC không phải SHA1, SHA256 hay SHA512."""

    def __init__(self, name):
        super().__init__(f"Unsupported algorithm: {name!r}")
        self.name = name
