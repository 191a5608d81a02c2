import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# RFC 6238 Appendix B seeds, one per algorithm
RFC_SEED_SHA1 = b"12345678901234567890"
RFC_SEED_SHA256 = b"12345678901234567890123456789012"
RFC_SEED_SHA512 = b"1234567890123456789012345678901234567890123456789012345678901234"

# Base32 of RFC_SEED_SHA1
RFC_SEED_SHA1_B32 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


class FakeClock:
    """Callable clock whose time only moves when told to."""

    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds=1):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock(1_700_000_000)


@pytest.fixture
def app():
    from backend import create_app
    from backend.config import TestingConfig

    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()
