"""Token verification against the MapKit JS bootstrap endpoint.

The endpoint is used purely as an oracle: a ``200`` means MapKit accepts the
token, any other status means it does not.  The response body is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from mapkit_token.errors import VerificationFailure

BOOTSTRAP_URL = "https://cdn.apple-mapkit.com/ma/bootstrap"
DEFAULT_ORIGIN = "https://localhost"
# MapKit JS release the bootstrap check is known to work with.
DEFAULT_MKJS_VERSION = "5.38.1"


@dataclass(frozen=True)
class Accepted:
    status_code: int = 200

    def describe(self) -> str:
        return "token accepted"


@dataclass(frozen=True)
class Rejected:
    status_code: int

    def describe(self) -> str:
        return f"token rejected with HTTP {self.status_code}"


@dataclass(frozen=True)
class NetworkError:
    cause: Exception

    def describe(self) -> str:
        reason = str(self.cause) or type(self.cause).__name__
        return f"bootstrap endpoint unreachable: {reason}"


VerificationOutcome = Accepted | Rejected | NetworkError


async def check_token(
    token: str,
    origin: str = DEFAULT_ORIGIN,
    client_version: str = DEFAULT_MKJS_VERSION,
    *,
    url: str = BOOTSTRAP_URL,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> VerificationOutcome:
    """Send one bootstrap request and classify the result.

    Each call opens its own client and only the status line is read.
    ``timeout=None`` keeps the httpx default.
    Redirects are not followed and nothing is retried.
    """
    params = {"apiVersion": 2, "mkjsVersion": client_version, "poi": 1}
    headers = {
        "Authorization": f"Bearer {token}",
        "Origin": origin,
        "Referer": origin,
    }
    client_kwargs: dict[str, Any] = {}
    if timeout is not None:
        client_kwargs["timeout"] = timeout
    if transport is not None:
        client_kwargs["transport"] = transport

    try:
        async with httpx.AsyncClient(**client_kwargs) as client:
            async with client.stream("GET", url, params=params, headers=headers) as response:
                status_code = response.status_code
    except httpx.RequestError as exc:
        return NetworkError(exc)

    if status_code == 200:
        return Accepted()
    return Rejected(status_code)


async def verify(
    token: str,
    origin: str = DEFAULT_ORIGIN,
    client_version: str = DEFAULT_MKJS_VERSION,
    **kwargs: Any,
) -> bool:
    """Return ``True`` if MapKit accepts ``token``.

    Raises :class:`VerificationFailure` otherwise; rejection and network
    failure both surface as the same exception with ``signal == False``.
    """
    outcome = await check_token(token, origin, client_version, **kwargs)
    if isinstance(outcome, Accepted):
        return True
    raise VerificationFailure(outcome)
