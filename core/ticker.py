"""
ticker.py — Cập nhật mã hiện tại mỗi giây.

TokenTicker tự quản lý thread nền của nó: start() bắt đầu tick, stop() hủy
và join thread, nên việc đổi secret hay tắt chương trình luôn xác định.
Cặp secret/tham số đang dùng được thay thế nguyên khối dưới lock; mỗi tick
chỉ thấy cặp cũ hoặc cặp mới, không bao giờ lẫn lộn.

Ví dụ:
    with TokenTicker(print) as ticker:
        ticker.set_input("otpauth://totp/x?secret=JBSWY3DPEHPK3PXP")
        ...
"""

from typing import Callable, Optional
import logging
import threading
import time

from core.otp_core import TokenSnapshot, error_snapshot, snapshot
from core.provisioning import ActiveToken, try_parse_input

logger = logging.getLogger(__name__)

TICK_INTERVAL = 1.0  # giây


class TokenTicker:
    def __init__(self, callback: Callable[[TokenSnapshot], None],
                 interval: float = TICK_INTERVAL,
                 clock: Callable[[], float] = time.time,
                 strict: bool = False):
        self._callback = callback
        self._interval = interval
        self._clock = clock
        self._strict = strict
        self._lock = threading.Lock()
        self._active: Optional[ActiveToken] = None
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # --- active token ------------------------------------------------------
    @property
    def active(self) -> Optional[ActiveToken]:
        with self._lock:
            return self._active

    def set_token(self, token: Optional[ActiveToken]) -> None:
        with self._lock:
            self._active = token

    def set_input(self, text: str) -> bool:
        """
        Parse input của user và dùng nó làm token hiện tại.

        Trả về False (và xóa token hiện tại) khi input rỗng hoặc không parse
        được; khi đó phần hiển thị nên được ẩn đi.
        """
        token = try_parse_input(text, strict=self._strict) if text and text.strip() else None
        self.set_token(token)
        return token is not None

    def clear(self) -> None:
        self.set_token(None)

    # --- ticking -----------------------------------------------------------
    def tick(self) -> Optional[TokenSnapshot]:
        """
        Tính một snapshot và chuyển cho callback.

        Trả về None (không gọi callback) khi chưa có token.
        Lỗi khi sinh mã (kể cả secret không giải mã được) được log lại và
        hiển thị bằng placeholder lỗi.
        """
        token = self.active
        if token is None:
            return None
        now = int(self._clock())
        try:
            snap = snapshot(token.secret, token.params, now)
        except Exception:
            logger.exception("Token update failed")
            snap = error_snapshot(token.params, now)
        self._callback(snap)
        return snap

    def _run(self) -> None:
        while not self._stop_event.wait(self._interval):
            try:
                self.tick()
            except Exception:
                # callback hiển thị lỗi không được làm dừng vòng tick
                logger.exception("Tick failed")

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Tick ngay lập tức, sau đó mỗi `interval` giây trên daemon thread."""
        if self.running:
            self.stop()
        self._stop_event.clear()
        try:
            self.tick()
        except Exception:
            logger.exception("Tick failed")
        self._thread = threading.Thread(target=self._run, name="token-ticker", daemon=True)
        self._thread.start()
        logger.debug("Ticker started (interval=%ss)", self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
            logger.debug("Ticker stopped")

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()
        return False
