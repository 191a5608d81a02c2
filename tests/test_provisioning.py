import pytest

from core.errors import InvalidCharacter, InvalidUri, MissingSecret
from core.otp_core import Algorithm, TotpParameters
from core.provisioning import parse_input, parse_uri, try_parse_input
from conftest import RFC_SEED_SHA1, RFC_SEED_SHA1_B32


def test_raw_secret_uses_defaults():
    token = parse_input("  jbsw y3dp ehpk 3pxp  ")
    assert token.secret == b"Hello!\xde\xad\xbe\xef"
    assert token.params == TotpParameters(6, 30, Algorithm.SHA1)


def test_full_uri():
    token = parse_input(
        "otpauth://totp/ACME:alice@example.com?secret=%s&issuer=ACME"
        "&digits=8&period=60&algorithm=sha256" % RFC_SEED_SHA1_B32
    )
    assert token.secret == RFC_SEED_SHA1
    assert token.params == TotpParameters(8, 60, Algorithm.SHA256)


def test_uri_secret_with_spaces_and_lowercase():
    token = parse_input("otpauth://totp/x?secret=jbsw%20y3dp")
    assert token.secret == b"Hello"


def test_uri_scheme_is_case_insensitive():
    token = parse_input("OTPAUTH://totp/x?secret=JBSWY3DP")
    assert token.secret == b"Hello"


def test_bad_digits_fall_back_to_six():
    token = parse_input("otpauth://totp/x?digits=99&secret=JBSWY3DP")
    assert token.params.digits == 6


@pytest.mark.parametrize("query, expected", [
    ("period=0", TotpParameters()),
    ("period=-5", TotpParameters()),
    ("period=abc", TotpParameters()),
    ("digits=seven", TotpParameters()),
    ("algorithm=MD5", TotpParameters()),
    ("algorithm=sha512", TotpParameters(algorithm=Algorithm.SHA512)),
    ("digits=8&period=15", TotpParameters(digits=8, period=15)),
])
def test_query_parameters_fall_back_to_defaults(query, expected):
    token = parse_input("otpauth://totp/x?secret=JBSWY3DP&" + query)
    assert token.params == expected


def test_uri_without_secret_fails():
    with pytest.raises(MissingSecret):
        parse_input("otpauth://totp/x?digits=99")


def test_uri_with_empty_secret_fails():
    with pytest.raises(MissingSecret):
        parse_uri("otpauth://totp/x?secret=%20")


def test_malformed_uri():
    with pytest.raises(InvalidUri):
        parse_input("otpauth://[totp/x?secret=JBSWY3DP")


def test_empty_input():
    with pytest.raises(MissingSecret):
        parse_input("   ")


def test_lenient_accepts_non_base32_secret_but_decoding_fails():
    token = parse_input("jbsw 0y3dp")
    assert token.secret_text == "JBSW0Y3DP"
    assert token.params == TotpParameters()
    with pytest.raises(InvalidCharacter):
        token.secret


def test_strict_rejects_non_base32_secret():
    with pytest.raises(InvalidCharacter):
        parse_input("JBSW0Y3DP", strict=True)


def test_try_parse_input_returns_none_on_failure():
    assert try_parse_input("") is None
    assert try_parse_input("otpauth://totp/x") is None
    assert try_parse_input("JBSW0Y3DP", strict=True) is None
    assert try_parse_input("JBSWY3DP").secret == b"Hello"


def test_repr_hides_secret():
    token = parse_input(RFC_SEED_SHA1_B32)
    assert RFC_SEED_SHA1_B32 not in repr(token)
    assert "12345678901234567890" not in repr(token)
    assert "32 chars" in repr(token)
