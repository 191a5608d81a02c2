import base64
import os

import pytest

from core import base32
from core.errors import InvalidCharacter
from conftest import RFC_SEED_SHA1, RFC_SEED_SHA1_B32


def test_normalize_strips_whitespace_case_and_padding():
    assert base32.normalize(" jbsw y3dp\t====\n") == "JBSWY3DP"


def test_decode_rfc_seed():
    assert base32.decode(RFC_SEED_SHA1_B32) == RFC_SEED_SHA1


def test_decode_grouped_lowercase_secret():
    assert base32.decode("jbsw y3dp ehpk 3pxp") == b"Hello!\xde\xad\xbe\xef"


@pytest.mark.parametrize("text, expected", [
    ("MY", b"f"),
    ("MZXQ", b"fo"),
    ("MZXW6", b"foo"),
    ("MZXW6YQ", b"foob"),
    ("MZXW6YTB", b"fooba"),
    ("MZXW6YTBOI======", b"foobar"),
])
def test_decode_rfc4648_vectors_with_and_without_padding(text, expected):
    assert base32.decode(text) == expected
    assert base32.decode(text.rstrip("=") + "=" * (-len(text.rstrip("=")) % 8)) == expected


def test_decode_matches_stdlib_for_random_secrets():
    for length in (10, 16, 20, 32, 64):
        raw = os.urandom(length)
        text = base64.b32encode(raw).decode("ascii")
        assert base32.decode(text) == raw
        assert base32.decode(text.rstrip("=").lower()) == raw


def test_hex_decode_keeps_odd_nibble():
    # 4 chars = 20 bits = 5 nibbles
    assert base32.hex_decode("MZXQ") == "666f0"
    assert base32.decode("MZXQ") == b"fo"


def test_hex_decode_drops_incomplete_nibble():
    # 3 chars = 15 bits = 3 nibbles + 3 dropped bits
    assert len(base32.hex_decode("MZX")) == 3


def test_empty_input_decodes_to_empty_key():
    assert base32.decode("") == b""
    assert base32.decode("  ==== ") == b""


def test_invalid_character_raises_by_default():
    with pytest.raises(InvalidCharacter) as excinfo:
        base32.decode("JBSW1Y3DP")
    assert excinfo.value.char == "1"
    assert excinfo.value.position == 4


def test_typo_is_not_silently_decoded():
    # '0' typed for 'O'
    with pytest.raises(InvalidCharacter):
        base32.decode("JBSW0Y3DP")
    with pytest.raises(InvalidCharacter):
        base32.hex_decode("JBSW0Y3DP")


def test_skip_invalid_option_drops_unknown_characters(caplog):
    with caplog.at_level("WARNING", logger="core.base32"):
        assert base32.decode("JBSW-Y3DP!", skip_invalid=True) == b"Hello"
    assert "Skipped 2" in caplog.text


def test_is_canonical():
    assert base32.is_canonical("jbsw y3dp==")
    assert not base32.is_canonical("JBSW0Y3DP")
    assert not base32.is_canonical("")
