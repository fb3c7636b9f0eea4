"""Value types produced by the parser and the fingerprint assembler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .tables import (
    EXT_SERVER_NAME,
    SEGMENT_SEPARATOR,
    VERSION_NAMES,
)


class HandshakeRole(str, Enum):
    """Which side of the connection sent the hello."""

    CLIENT = "client"
    SERVER = "server"


class TransportMode(str, Enum):
    """Transport the handshake was carried over."""

    STREAM = "stream"
    DATAGRAM = "datagram"
    QUIC = "quic"


@dataclass(slots=True, frozen=True)
class Extension:
    """A single hello extension in the order it was offered.

    Attributes:
        code: 16-bit extension type.
        length: Declared payload length in bytes.
        payload: Raw payload for extension types the parser interprets,
            None for types recorded by code only.
    """

    code: int
    length: int
    payload: bytes | None = None


@dataclass(slots=True, frozen=True)
class FieldSet:
    """Fields extracted from one Client or Server Hello.

    Lists are kept exactly as offered on the wire, GREASE values included.
    Filtering and reordering happen only during canonicalization.

    Attributes:
        role: Client or server hello.
        mode: Transport the hello arrived on.
        legacy_version: Version field of the hello body.
        version: Negotiated (server) or highest offered (client) version.
        supported_versions: Versions from the supported_versions extension.
        session_id_length: Length of the session id in bytes.
        ciphers: Offered cipher suites (client) or the selected one (server).
        compression_methods: Offered or selected compression methods.
        extensions: Extensions in wire order.
        sni: Server name from the server_name extension.
        alpn: ALPN protocol names in wire order.
        signature_algorithms: Offered signature algorithms in wire order.
        supported_groups: Offered named groups in wire order.
        ec_point_formats: Offered EC point formats.
        degraded: True if any part of the hello could not be decoded.
        issues: Human-readable descriptions of what was not decoded.
    """

    role: HandshakeRole
    mode: TransportMode
    legacy_version: int
    version: int
    supported_versions: tuple[int, ...] = ()
    session_id_length: int = 0
    ciphers: tuple[int, ...] = ()
    compression_methods: tuple[int, ...] = ()
    extensions: tuple[Extension, ...] = ()
    sni: str | None = None
    alpn: tuple[bytes, ...] = ()
    signature_algorithms: tuple[int, ...] = ()
    supported_groups: tuple[int, ...] = ()
    ec_point_formats: tuple[int, ...] = ()
    degraded: bool = False
    issues: tuple[str, ...] = ()

    @property
    def extension_codes(self) -> list[int]:
        """Extension type codes in wire order."""
        return [ext.code for ext in self.extensions]

    @property
    def sni_present(self) -> bool:
        """Whether a server_name extension was offered, decodable or not."""
        return any(ext.code == EXT_SERVER_NAME for ext in self.extensions)

    @property
    def first_alpn(self) -> bytes | None:
        return self.alpn[0] if self.alpn else None

    @property
    def selected_cipher(self) -> int | None:
        """Cipher chosen by the server, None for client hellos."""
        if self.role is HandshakeRole.SERVER and self.ciphers:
            return self.ciphers[0]
        return None

    @property
    def version_name(self) -> str:
        return VERSION_NAMES.get(self.version, f"Unknown (0x{self.version:04x})")

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary for display."""
        return {
            "role": self.role.value,
            "mode": self.mode.value,
            "legacy_version": f"0x{self.legacy_version:04x}",
            "version": f"0x{self.version:04x}",
            "version_name": self.version_name,
            "supported_versions": [f"0x{v:04x}" for v in self.supported_versions],
            "session_id_length": self.session_id_length,
            "ciphers": [f"{c:04x}" for c in self.ciphers],
            "compression_methods": list(self.compression_methods),
            "extensions": [f"{e.code:04x}" for e in self.extensions],
            "sni": self.sni,
            "alpn": [p.decode("ascii", errors="replace") for p in self.alpn],
            "signature_algorithms": [f"{s:04x}" for s in self.signature_algorithms],
            "supported_groups": [f"{g:04x}" for g in self.supported_groups],
            "ec_point_formats": list(self.ec_point_formats),
            "degraded": self.degraded,
            "issues": list(self.issues),
        }


@dataclass(slots=True, frozen=True)
class Fingerprint:
    """A composed fingerprint and its parts.

    Attributes:
        kind: "ja4" for client hellos, "ja4s" for server hellos.
        prefix: Human-readable prefix segment.
        cipher_segment: Cipher hash (client) or selected cipher (server).
        extension_segment: Extension hash.
        raw: The same fingerprint with canonical strings in place of hashes.
        degraded: True if built from a degraded FieldSet; such values must
            not be used for exact-match lookups.
    """

    kind: str
    prefix: str
    cipher_segment: str
    extension_segment: str
    raw: str = ""
    degraded: bool = False

    @property
    def value(self) -> str:
        return SEGMENT_SEPARATOR.join((self.prefix, self.cipher_segment, self.extension_segment))

    def __str__(self) -> str:
        return self.value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {self.kind: self.value, "degraded": self.degraded}
        if self.raw:
            data[f"{self.kind}_r"] = self.raw
        return data


@dataclass(slots=True, frozen=True)
class FingerprintResult:
    """Parser output paired with the fingerprint computed from it."""

    fields: FieldSet
    fingerprint: Fingerprint

    @property
    def degraded(self) -> bool:
        return self.fingerprint.degraded

    def to_dict(self) -> dict[str, Any]:
        return {
            "fingerprint": self.fingerprint.to_dict(),
            "fields": self.fields.to_dict(),
        }
