"""
CLI entry point for the JWT Decode tool.

Provides both interactive mode (prompt for token) and argument mode
(pass token directly or pipe via stdin).  When a secret is available the
HMAC signature is verified as well; expiry is always reported.
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys

from .config import ENV_SECRET, ConfigError, load_config, merge_cli_overrides
from .logging_setup import setup_logging
from .models import VerificationStatus
from .orchestrator import verify_token
from .report import render_json, render_text
from .signer import generate_example

__all__ = ["main"]

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_SIGNATURE = 3


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="jwt-decode",
        description="Decode a JWT token and optionally verify its HMAC signature (HS256/384/512).",
        epilog="Examples:\n"
               "  %(prog)s                                # interactive prompt\n"
               "  %(prog)s <token>                         # decode only\n"
               "  %(prog)s <token> --secret s3cr3t         # decode and verify\n"
               "  echo '<token>' | %(prog)s --stdin --json # read from stdin, JSON output\n"
               "  %(prog)s --example                       # sign and verify an example token\n"
               f"\nThe secret may also be supplied via the {ENV_SECRET} environment variable.\n"
               "Exit codes: 0 decoded, 1 error, 3 invalid signature.\n",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "token",
        nargs="?",
        default=None,
        help="JWT token string (optional; prompts interactively if omitted)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        default=False,
        help="Read token from stdin (for piping)",
    )
    secret_group = parser.add_mutually_exclusive_group()
    secret_group.add_argument(
        "--secret",
        "-s",
        default=None,
        help="Secret used to verify the signature",
    )
    secret_group.add_argument(
        "--secret-env",
        default=None,
        metavar="VAR",
        help="Read the secret from the named environment variable",
    )
    secret_group.add_argument(
        "--ask-secret",
        action="store_true",
        default=False,
        help="Prompt for the secret without echoing it",
    )
    parser.add_argument(
        "--now",
        type=int,
        default=None,
        metavar="EPOCH",
        help="Evaluate exp/nbf at this Unix time instead of the current time",
    )
    parser.add_argument(
        "--leeway",
        type=int,
        default=None,
        metavar="SECONDS",
        help="Clock skew tolerance for exp/nbf (overrides config)",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        default=False,
        help="Generate a signed example token and verify it with the example secret",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the result as JSON",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to YAML config file (default: config/config.yaml if present)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (debug) logging",
    )
    return parser.parse_args(argv)


# ---------------------------------------------------------------------------
# Input resolution
# ---------------------------------------------------------------------------

def _read_token(args: argparse.Namespace) -> str:
    if args.stdin:
        token = sys.stdin.read().strip()
        if not token:
            print("Error: No token received on stdin.")
            sys.exit(EXIT_ERROR)
        return token
    if args.token:
        return args.token

    # Interactive mode
    print("JWT Token Decoder")
    print("=================")
    try:
        return input("Please enter your JWT token: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        sys.exit(130)


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    try:
        cfg = merge_cli_overrides(load_config(args.config), args)
    except ConfigError as exc:
        print(f"Error: {exc}")
        sys.exit(EXIT_ERROR)

    setup_logging(verbose=cfg.logging.verbose, log_file=cfg.logging.file)

    secret = cfg.verification.secret
    if args.example:
        ex = cfg.example
        token = generate_example(ex.secret, ex.algorithm, ex.lifetime_seconds, now=args.now)
        secret = args.secret or ex.secret
        if cfg.output.format != "json":
            print(f"Example token ({ex.algorithm}, secret {ex.secret!r}):\n{token}\n")
    else:
        token = _read_token(args)

    if args.ask_secret:
        try:
            secret = getpass.getpass("Secret: ")
        except (EOFError, KeyboardInterrupt):
            print()
            sys.exit(130)

    report = verify_token(token, secret or None, now=args.now, leeway=cfg.verification.leeway_seconds)

    indent = cfg.output.indent
    if cfg.output.format == "json":
        print(render_json(report, indent=indent))
    else:
        print(render_text(report, indent=indent))

    if report.error is not None:
        logger.debug("Decoding failed with %s", report.error.kind.value)
        sys.exit(EXIT_ERROR)
    if report.verification.status is VerificationStatus.INVALID:
        sys.exit(EXIT_INVALID_SIGNATURE)
    sys.exit(EXIT_OK)
