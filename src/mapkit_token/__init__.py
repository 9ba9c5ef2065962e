"""mapkit-token - generate and verify MapKit JS authorization tokens."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

# Used only when running from source without installed package metadata.
__fallback_version__ = "0.1.0"

try:
    __version__ = _pkg_version("mapkit-token")
except PackageNotFoundError:
    __version__ = __fallback_version__

from mapkit_token.config import Settings
from mapkit_token.errors import ConfigurationError, SigningError, VerificationFailure
from mapkit_token.jwt import TokenClaims, TokenHeader, build_token
from mapkit_token.verify import check_token, verify

__all__ = [
    "ConfigurationError",
    "Settings",
    "SigningError",
    "TokenClaims",
    "TokenHeader",
    "VerificationFailure",
    "__version__",
    "build_token",
    "check_token",
    "verify",
]
