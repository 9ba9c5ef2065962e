"""Error taxonomy shared by the builder, the verifier and the CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mapkit_token.verify import VerificationOutcome


class MapKitTokenError(Exception):
    """Base exception carrying a stable error code."""

    code = "MAPKIT_TOKEN_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigurationError(MapKitTokenError):
    """Missing or invalid input, raised before any signing or network work."""

    code = "CONFIGURATION_ERROR"


class SigningError(MapKitTokenError):
    """The token could not be signed with the given key."""

    code = "SIGNING_ERROR"


class VerificationFailure(MapKitTokenError):
    """The bootstrap endpoint did not accept the token.

    Covers both a rejection and an unreachable endpoint. ``signal`` is always
    ``False``; ``outcome`` keeps the detail for callers that need it.
    """

    code = "VERIFICATION_FAILED"
    signal = False

    def __init__(self, outcome: VerificationOutcome) -> None:
        self.outcome = outcome
        super().__init__(outcome.describe())
