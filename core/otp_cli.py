#!/usr/bin/env python3
"""
otp_cli.py — CLI wrapper cho core của OTP viewer.

Cung cấp các subcommand:
- code   : in mã hiện tại và số giây còn hiệu lực
- watch  : cập nhật mã mỗi giây cho tới khi Ctrl+C
- decode : in key hex mà secret Base32 giải mã ra

Tham số vị trí là secret Base32 hoặc otpauth:// URI.
--digits/--period/--algorithm ghi đè giá trị trong URI.
"""

import argparse
import dataclasses
import logging
import sys
import time

from core import base32
from core import otp_core
from core.errors import TokenError
from core.provisioning import ActiveToken, parse_input
from core.ticker import TokenTicker

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


def _load_token(args) -> ActiveToken:
    token = parse_input(args.secret, strict=args.strict)
    overrides = {}
    if args.digits is not None:
        overrides["digits"] = args.digits
    if args.period is not None:
        overrides["period"] = args.period
    if args.algorithm is not None:
        overrides["algorithm"] = args.algorithm
    if overrides:
        token = ActiveToken(token.secret_text, dataclasses.replace(token.params, **overrides))
    return token


# --- CLI command handlers ---
def cmd_code(args):
    token = _load_token(args)
    now = int(args.time if args.time is not None else time.time())
    snap = otp_core.snapshot(token.secret, token.params, now)
    print(f"{snap.display}  (valid ~{snap.seconds_remaining:2d}s)")


def cmd_watch(args):
    token = _load_token(args)
    p = token.params
    print(f"Press Ctrl+C to quit. {p.digits}-digit {p.algorithm.value} TOTP every {p.period}s...\n")
    last_code = None

    def show(snap):
        nonlocal last_code
        warn = " !" if snap.expiring else ""
        if snap.code != last_code:
            print(f"\nTOTP: {snap.display}  (valid ~{snap.seconds_remaining:2d}s)")
            last_code = snap.code
        else:
            print(f".. {snap.seconds_remaining:2d}s left{warn}  ", end="\r", flush=True)

    ticker = TokenTicker(show, interval=args.interval)
    ticker.set_token(token)
    try:
        with ticker:
            while ticker.running:
                time.sleep(0.2)
    except KeyboardInterrupt:
        print("\nBye.")


def cmd_decode(args):
    print(base32.hex_decode(args.secret, skip_invalid=args.skip_invalid))


def cmd_help(args):
    print("'otp-viewer -h' for help.")


# --- Argparse builder ---
def _add_token_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("secret", help="Base32 secret or otpauth:// URI")
    p.add_argument("--digits", type=int, choices=otp_core.ALLOWED_DIGITS,
                   help="Override number of digits")
    p.add_argument("--period", type=int, help="Override TOTP period (seconds)")
    p.add_argument("--algorithm", choices=[a.value for a in otp_core.Algorithm],
                   type=str.upper, help="Override HMAC algorithm")
    p.add_argument("--strict", action="store_true", help="Reject non-Base32 characters")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="otp-viewer", description="TOTP code viewer (RFC 6238)")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # code
    pc = sub.add_parser("code", help="Print the current TOTP code")
    _add_token_args(pc)
    pc.add_argument("--time", type=int, help="Unix time to compute the code for")
    pc.set_defaults(func=cmd_code)

    # watch
    pw = sub.add_parser("watch", help="Show the TOTP code in real time")
    _add_token_args(pw)
    pw.add_argument("--interval", type=float, default=1.0, help=argparse.SUPPRESS)
    pw.set_defaults(func=cmd_watch)

    # decode
    pd = sub.add_parser("decode", help="Print the hex key of a Base32 secret")
    pd.add_argument("secret", help="Base32 secret")
    pd.add_argument("--skip-invalid", action="store_true",
                    help="Skip non-Base32 characters instead of failing")
    pd.set_defaults(func=cmd_decode)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    try:
        args.func(args)
    except (TokenError, ValueError) as e:
        print(f"[!] {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
