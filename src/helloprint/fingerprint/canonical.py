"""Canonical string construction for hello fingerprints.

Each function here is pure: it filters GREASE values, applies the ordering
rule of its field group and renders the result with the separators and
tokens from :mod:`helloprint.core.tables`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from ..core.config import FingerprintConfig
from ..core.tables import (
    ALPN_FALLBACK_TOKEN,
    COUNT_CAP,
    COUNT_WIDTH,
    PREFIX_ONLY_EXTENSIONS,
    SEGMENT_SEPARATOR,
    SNI_ABSENT_TOKEN,
    SNI_PRESENT_TOKEN,
    TRANSPORT_TOKENS,
    VALUE_SEPARATOR,
    VERSION_FALLBACK_TOKEN,
    VERSION_TOKENS,
)
from ..core.types import FieldSet, HandshakeRole, TransportMode
from ..utils.grease import filter_grease

_DEFAULT_CONFIG = FingerprintConfig()


@dataclass(slots=True, frozen=True)
class CanonicalHello:
    """Canonical parts of one hello, ready to be hashed.

    Attributes:
        prefix: Fixed-width human-readable prefix.
        ciphers: Canonical cipher string (client) or selected cipher token
            (server).
        extensions: Canonical extension string, empty when there is nothing
            to hash.
    """

    prefix: str
    ciphers: str
    extensions: str


def version_token(version: int) -> str:
    return VERSION_TOKENS.get(version, VERSION_FALLBACK_TOKEN)


def transport_token(mode: TransportMode) -> str:
    return TRANSPORT_TOKENS[TransportMode(mode).value]


def sni_token(present: bool) -> str:
    return SNI_PRESENT_TOKEN if present else SNI_ABSENT_TOKEN


def count_token(count: int) -> str:
    """Render a count as two digits, capped at 99."""
    return f"{min(count, COUNT_CAP):0{COUNT_WIDTH}d}"


def _is_alnum(byte: int) -> bool:
    return 0x30 <= byte <= 0x39 or 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def alpn_token(protocol: bytes | None) -> str:
    """First and last character of the first ALPN protocol.

    A one-byte protocol repeats its only character. When either end is not
    an ASCII letter or digit, the first and last characters of the hex
    encoding are used instead. A missing or empty protocol gives "00".
    """
    if not protocol:
        return ALPN_FALLBACK_TOKEN
    first, last = protocol[0], protocol[-1]
    if _is_alnum(first) and _is_alnum(last):
        return chr(first) + chr(last)
    hexed = protocol.hex()
    return hexed[0] + hexed[-1]


def _join(codes: Iterable[int]) -> str:
    return VALUE_SEPARATOR.join(f"{code:04x}" for code in codes)


def cipher_codes(ciphers: Sequence[int], config: FingerprintConfig = _DEFAULT_CONFIG) -> list[int]:
    """GREASE-filtered ciphers in offered order, or sorted if configured."""
    codes = filter_grease(ciphers)
    if config.cipher_order == "sorted":
        codes.sort()
    return codes


def cipher_canonical(ciphers: Sequence[int], config: FingerprintConfig = _DEFAULT_CONFIG) -> str:
    """Canonical cipher string, e.g. ``"1301,1302,c02b"``. Empty input gives ``""``."""
    return _join(cipher_codes(ciphers, config))


def extension_codes(extensions: Sequence[int], config: FingerprintConfig = _DEFAULT_CONFIG) -> list[int]:
    """Extension types that take part in the extension hash.

    GREASE values are always dropped. By default server_name and ALPN are
    removed and the rest sorted numerically; with ``original_order`` all
    extensions stay in offered order.
    """
    codes = filter_grease(extensions)
    if config.original_order:
        return codes
    return sorted(code for code in codes if code not in PREFIX_ONLY_EXTENSIONS)


def signature_algorithm_codes(
    signature_algorithms: Sequence[int],
    config: FingerprintConfig = _DEFAULT_CONFIG,
) -> list[int]:
    if config.grease_signature_algorithms:
        return filter_grease(signature_algorithms)
    return list(signature_algorithms)


def extension_canonical(
    extensions: Sequence[int],
    signature_algorithms: Sequence[int] = (),
    config: FingerprintConfig = _DEFAULT_CONFIG,
) -> str:
    """Canonical extension string with signature algorithms appended.

    Example:
        >>> extension_canonical([0x0010, 0x000d, 0x000a, 0x0000], [0x0403, 0x0804])
        '000a,000d_0403,0804'
    """
    codes = extension_codes(extensions, config)
    if not codes:
        return ""
    canonical = _join(codes)
    sig_algs = signature_algorithm_codes(signature_algorithms, config)
    if sig_algs:
        canonical += SEGMENT_SEPARATOR + _join(sig_algs)
    return canonical


def client_prefix(fields: FieldSet, config: FingerprintConfig = _DEFAULT_CONFIG) -> str:
    """Ten-character client prefix, e.g. ``t13d1516h2``."""
    return "".join(
        (
            transport_token(fields.mode),
            version_token(fields.version),
            sni_token(fields.sni_present),
            count_token(len(filter_grease(fields.ciphers))),
            count_token(len(filter_grease(fields.extension_codes))),
            alpn_token(fields.first_alpn),
        )
    )


def server_prefix(fields: FieldSet) -> str:
    """Seven-character server prefix, e.g. ``t120200``."""
    return "".join(
        (
            transport_token(fields.mode),
            version_token(fields.version),
            count_token(len(filter_grease(fields.extension_codes))),
            alpn_token(fields.first_alpn),
        )
    )


def canonicalize(fields: FieldSet, config: FingerprintConfig = _DEFAULT_CONFIG) -> CanonicalHello:
    """Build the canonical parts for a hello of either role."""
    if fields.role is HandshakeRole.SERVER:
        selected = fields.selected_cipher
        return CanonicalHello(
            prefix=server_prefix(fields),
            ciphers=f"{selected:04x}" if selected is not None else "",
            extensions=_join(filter_grease(fields.extension_codes)),
        )
    return CanonicalHello(
        prefix=client_prefix(fields, config),
        ciphers=cipher_canonical(fields.ciphers, config),
        extensions=extension_canonical(fields.extension_codes, fields.signature_algorithms, config),
    )
