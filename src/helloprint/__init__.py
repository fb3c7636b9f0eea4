"""helloprint - TLS hello fingerprinting library.

helloprint turns a raw Client Hello or Server Hello into a short, stable
fingerprint derived from the shape of the handshake: offered versions,
cipher suites, extensions and ALPN values.

Example:
    >>> import helloprint as hp
    >>> result = hp.fingerprint_handshake(client_hello, "client")
    >>> print(result.fingerprint)

Lower-level access:
    >>> fields = hp.parse_hello(client_hello, hp.HandshakeRole.CLIENT)
    >>> hp.fingerprint_fields(fields, hp.FingerprintConfig(original_order=True))
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version


def _resolve_version() -> str:
    """Resolve the installed package version."""
    try:
        return _pkg_version("helloprint")
    except PackageNotFoundError:
        # Source checkout without an installed distribution.
        return "0.0.0"


__version__ = _resolve_version()

from .core.config import FingerprintConfig
from .core.errors import (
    HandshakeError,
    MalformedHandshake,
    MalformedLength,
    NotAHelloMessage,
    TruncatedMessage,
    UnsupportedVersion,
)
from .core.types import (
    Extension,
    FieldSet,
    Fingerprint,
    FingerprintResult,
    HandshakeRole,
    TransportMode,
)
from .extractors.hello import parse_hello
from .fingerprint.assemble import fingerprint_fields, fingerprint_handshake

__all__ = [
    "__version__",
    "FingerprintConfig",
    "HandshakeError",
    "MalformedHandshake",
    "MalformedLength",
    "NotAHelloMessage",
    "TruncatedMessage",
    "UnsupportedVersion",
    "Extension",
    "FieldSet",
    "Fingerprint",
    "FingerprintResult",
    "HandshakeRole",
    "TransportMode",
    "parse_hello",
    "fingerprint_fields",
    "fingerprint_handshake",
]
