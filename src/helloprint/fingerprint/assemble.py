"""Fingerprint assembly and the top-level fingerprinting entry point."""

from __future__ import annotations

import logging

from ..core.config import FingerprintConfig
from ..core.tables import EMPTY_CIPHER_TOKEN, SEGMENT_SEPARATOR
from ..core.types import (
    FieldSet,
    Fingerprint,
    FingerprintResult,
    HandshakeRole,
    TransportMode,
)
from ..extractors.hello import parse_hello
from ..utils.hashing import hash12
from .canonical import canonicalize

logger = logging.getLogger(__name__)

CLIENT_KIND = "ja4"
SERVER_KIND = "ja4s"


def assemble(
    prefix: str,
    cipher_segment: str,
    extension_segment: str,
    *,
    kind: str = CLIENT_KIND,
    raw: str = "",
    degraded: bool = False,
) -> Fingerprint:
    """Join a prefix and two segments into a Fingerprint."""
    return Fingerprint(
        kind=kind,
        prefix=prefix,
        cipher_segment=cipher_segment,
        extension_segment=extension_segment,
        raw=raw,
        degraded=degraded,
    )


def fingerprint_fields(fields: FieldSet, config: FingerprintConfig | None = None) -> Fingerprint:
    """Compute the fingerprint of an already parsed hello.

    Client hellos produce the ten-character-prefix client fingerprint with
    hashed cipher and extension segments. Server hellos produce the server
    variant, whose middle segment is the selected cipher in hex.

    A degraded FieldSet still yields a well-formed fingerprint, flagged
    ``degraded``.
    """
    config = config or FingerprintConfig()
    canonical = canonicalize(fields, config)

    if fields.role is HandshakeRole.SERVER:
        kind = SERVER_KIND
        cipher_segment = canonical.ciphers or EMPTY_CIPHER_TOKEN
    else:
        kind = CLIENT_KIND
        cipher_segment = hash12(canonical.ciphers)
    extension_segment = hash12(canonical.extensions)

    raw = ""
    if config.include_raw:
        raw = SEGMENT_SEPARATOR.join(
            (canonical.prefix, canonical.ciphers or cipher_segment, canonical.extensions)
        )

    if fields.degraded:
        logger.debug(f"Fingerprint built from degraded {fields.role.value} hello: {'; '.join(fields.issues)}")

    return assemble(
        canonical.prefix,
        cipher_segment,
        extension_segment,
        kind=kind,
        raw=raw,
        degraded=fields.degraded,
    )


def fingerprint_handshake(
    data: bytes | bytearray | memoryview,
    role: HandshakeRole | str,
    mode: TransportMode | str = TransportMode.STREAM,
    config: FingerprintConfig | None = None,
) -> FingerprintResult:
    """Parse one hello message and fingerprint it.

    This is a pure function of its arguments: it keeps no state between
    calls and can be used from any number of threads at once.

    Args:
        data: One Client Hello or Server Hello, optionally record-wrapped.
        role: Role of the sender.
        mode: Transport the hello was carried on.
        config: Canonicalization options; defaults to FingerprintConfig().

    Returns:
        The parsed FieldSet together with its Fingerprint.

    Raises:
        HandshakeError: Any fatal parse error (see parse_hello).

    Example:
        >>> result = fingerprint_handshake(client_hello_bytes, "client")
        >>> str(result.fingerprint)
        't13d1516h2_...'
    """
    config = config or FingerprintConfig()
    fields = parse_hello(data, role, mode, strict=config.strict)
    return FingerprintResult(fields=fields, fingerprint=fingerprint_fields(fields, config))
