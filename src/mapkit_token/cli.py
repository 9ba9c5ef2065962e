"""``mapkit-token`` command line tool.

Builds a MapKit JS token from the command line (or ``MAPKIT_TOKEN_*``
environment variables), optionally checks it against the MapKit bootstrap
endpoint and prints the result.

Exit codes: 0 on success, 1 when signing fails or the token does not verify,
2 on configuration errors.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import UTC, datetime

import httpx
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from mapkit_token import __version__
from mapkit_token.config import Settings
from mapkit_token.duration import resolve_timestamp
from mapkit_token.errors import ConfigurationError, SigningError, VerificationFailure
from mapkit_token.jwt import TokenClaims, TokenHeader, build_token
from mapkit_token.keys import load_private_key
from mapkit_token.log import configure_logging, get_logger
from mapkit_token.output import render_token_info
from mapkit_token.verify import DEFAULT_ORIGIN, verify

logger = get_logger(__name__)

LOG_LEVELS = ["debug", "info", "warning", "error", "critical"]


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mapkit-token",
        description="Generate a MapKit JS token and check it against the MapKit servers.",
    )
    parser.add_argument(
        "--kid",
        default=settings.kid or None,
        help="A 10-character key identifier (kid), obtained from your Apple Developer account",
    )
    parser.add_argument(
        "--iss",
        default=settings.iss or None,
        help="The Issuer (iss) claim: your 10-character Team ID",
    )
    parser.add_argument(
        "--key",
        dest="key_file",
        default=settings.key_file or None,
        help="MapKit private key file path",
    )
    parser.add_argument(
        "--iat",
        default=settings.iat,
        help="Issued At (iat) relative to now, e.g. '0', '2d', '1y' (default: %(default)s)",
    )
    parser.add_argument(
        "--exp",
        default=settings.exp,
        help="Expiration Time (exp) relative to now, e.g. '1h', '2d', '1y' (default: %(default)s)",
    )
    parser.add_argument(
        "--origin",
        default=settings.origin or None,
        help="The Origin (origin) claim, a fully qualified domain matching the browser Origin header",
    )
    parser.add_argument(
        "--sub",
        default=settings.sub or None,
        help="The Subject (sub) claim",
    )
    parser.add_argument(
        "--verify",
        action=argparse.BooleanOptionalAction,
        default=settings.verify,
        help="Test the generated token with MapKit servers (default: %(default)s)",
    )
    parser.add_argument(
        "--stdout",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Output only the token, suitable for piping",
    )
    parser.add_argument(
        "--mkjs-version",
        default=settings.mkjs_version,
        help="MapKit JS version sent with the verification request (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.verify_timeout,
        help="Verification timeout in seconds (default: transport default)",
    )
    parser.add_argument("--log-level", default=settings.log_level, choices=LOG_LEVELS)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--alg", default=settings.alg, help=argparse.SUPPRESS)
    parser.add_argument("--typ", default=settings.typ, help=argparse.SUPPRESS)
    parser.add_argument("--bootstrap-url", default=settings.bootstrap_url, help=argparse.SUPPRESS)
    return parser


def resolve_request(
    args: argparse.Namespace, now: datetime
) -> tuple[TokenHeader, TokenClaims, str]:
    """Turn parsed arguments into header, claims and key material.

    Raises :class:`ConfigurationError` before any signing happens.
    """
    required = (("--kid", args.kid), ("--iss", args.iss), ("--key", args.key_file))
    missing = [flag for flag, value in required if not value]
    if missing:
        raise ConfigurationError(f"Missing required option(s): {', '.join(missing)}")

    key = load_private_key(args.key_file)
    try:
        header = TokenHeader(alg=args.alg, kid=args.kid, typ=args.typ)
        claims = TokenClaims(
            iss=args.iss,
            iat=resolve_timestamp(args.iat, now),
            exp=resolve_timestamp(args.exp, now),
            sub=args.sub,
            origin=args.origin,
        )
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
    return header, claims, key


async def run(
    args: argparse.Namespace,
    *,
    now: datetime,
    console: Console,
    err_console: Console,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    header, claims, key = resolve_request(args, now)
    token = build_token(header, claims, key)
    logger.debug("Token built", kid=header.kid, iss=claims.iss, iat=claims.iat, exp=claims.exp)

    valid: bool | None = None
    if args.verify:
        try:
            valid = await verify(
                token,
                claims.origin or DEFAULT_ORIGIN,
                args.mkjs_version,
                url=args.bootstrap_url,
                timeout=args.timeout,
                transport=transport,
            )
        except VerificationFailure as exc:
            logger.warning("Token verification failed", reason=exc.message)
            valid = False
        else:
            logger.info("Token verified", origin=claims.origin or DEFAULT_ORIGIN)

    if valid is False:
        render_token_info(console, header, claims, token, valid, err_console=err_console)
        return 1

    if args.stdout:
        console.out(token, highlight=False)
    else:
        render_token_info(console, header, claims, token, valid, err_console=err_console)
    return 0


def main(argv: list[str] | None = None) -> None:
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"mapkit-token: error: invalid environment configuration\n{exc}", file=sys.stderr)
        raise SystemExit(2) from None

    parser = build_parser(settings)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)
    now = datetime.now(UTC)

    try:
        code = asyncio.run(run(args, now=now, console=console, err_console=err_console))
    except ConfigurationError as exc:
        parser.exit(2, f"{parser.prog}: error: {exc.message} ({exc.code})\n")
    except SigningError as exc:
        err_console.print(Text(f"{exc.message} ({exc.code})", style="red"))
        raise SystemExit(1) from None
    raise SystemExit(code)
