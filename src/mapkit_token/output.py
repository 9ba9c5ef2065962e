"""Human-readable summary of a generated token."""

from __future__ import annotations

from datetime import datetime

from rich.console import Console
from rich.text import Text

from mapkit_token.duration import SECOND, format_duration
from mapkit_token.jwt import TokenClaims, TokenHeader
from mapkit_token.keys import DOC_URL


def _validity(valid: bool | None) -> Text:
    if valid is None:
        return Text("skipped", style="yellow")
    if valid:
        return Text("valid", style="green")
    return Text("invalid", style="red")


def _timestamp(value: int) -> str:
    try:
        moment = datetime.fromtimestamp(value).astimezone()
    except (ValueError, OverflowError, OSError):
        return f"{value} (Invalid Date)"
    return f"{value} ({moment:%a %b %d %Y %H:%M:%S %Z})"


def render_token_info(
    console: Console,
    header: TokenHeader,
    claims: TokenClaims,
    token: str,
    valid: bool | None,
    *,
    err_console: Console | None = None,
) -> None:
    """Print the token with the settings used to build it.

    ``valid`` is ``None`` when verification was skipped.
    """
    seconds = claims.exp - claims.iat
    rows: list[tuple[str, str | Text]] = [
        ("Key Id (kid)", header.kid),
        ("Issuer (iss)", claims.iss),
        ("Issued (iat)", _timestamp(claims.iat)),
        ("Expire (exp)", _timestamp(claims.exp)),
        ("Expires In", f"{format_duration(seconds * SECOND)} ({seconds}s)"),
        ("Origin", claims.origin or Text("none", style="yellow")),
    ]
    if claims.sub:
        rows.append(("Subject (sub)", claims.sub))
    rows.append(("Valid", _validity(valid)))
    rows.append(("Token", token))

    width = max(len(name) for name, _ in rows)

    console.print()
    console.print(Text("Token Information:", style="bold underline"))
    for name, value in rows:
        line = Text(name.ljust(width), style="bold")
        line.append("  ")
        line.append(value)
        console.print(line, soft_wrap=True)
    console.print()

    if valid is False:
        (err_console or console).print(Text("Token failed to validate!", style="bright_red"))
        console.print(f"See docs: {DOC_URL}", soft_wrap=True, highlight=False)
