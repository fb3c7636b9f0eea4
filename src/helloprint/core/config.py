"""Configuration for fingerprint computation."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

CipherOrder = Literal["offered", "sorted"]

_CIPHER_ORDERS = ("offered", "sorted")


@dataclass(frozen=True)
class FingerprintConfig:
    """Options controlling how hellos are canonicalized.

    The defaults produce the standard client and server fingerprints.

    Attributes:
        cipher_order: "offered" keeps ciphers in wire order; "sorted" sorts
            them numerically before hashing.
        original_order: Keep extensions in wire order and keep the
            server_name and ALPN extensions in the extension hash.
        grease_signature_algorithms: Also drop GREASE values from the
            signature algorithm list.
        include_raw: Attach the unhashed canonical form to each fingerprint.
        strict: Raise UnsupportedVersion instead of returning a degraded
            result.
    """

    cipher_order: CipherOrder = "offered"
    original_order: bool = False
    grease_signature_algorithms: bool = False
    include_raw: bool = False
    strict: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.cipher_order not in _CIPHER_ORDERS:
            raise ValueError(f"cipher_order must be one of {', '.join(_CIPHER_ORDERS)}")

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary.

        Returns:
            Dictionary representation of configuration.
        """
        return {
            "cipher_order": self.cipher_order,
            "original_order": self.original_order,
            "grease_signature_algorithms": self.grease_signature_algorithms,
            "include_raw": self.include_raw,
            "strict": self.strict,
        }

    def to_json(self, path: str | Path) -> None:
        """Save configuration to JSON file."""
        path = Path(path)
        with path.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FingerprintConfig:
        """Create configuration from dictionary.

        Args:
            data: Dictionary with configuration values.

        Returns:
            FingerprintConfig instance.

        Raises:
            ValueError: If data is not a mapping.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping, got {type(data).__name__}")
        return cls(
            cipher_order=data.get("cipher_order", "offered"),
            original_order=data.get("original_order", False),
            grease_signature_algorithms=data.get("grease_signature_algorithms", False),
            include_raw=data.get("include_raw", False),
            strict=data.get("strict", False),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> FingerprintConfig:
        """Load configuration from JSON file.

        Raises:
            FileNotFoundError: If file does not exist.
            json.JSONDecodeError: If file is not valid JSON.
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_yaml(cls, path: str | Path) -> FingerprintConfig:
        """Load configuration from YAML file.

        Raises:
            FileNotFoundError: If file does not exist.
            ImportError: If PyYAML is not installed.
        """
        try:
            import yaml
        except ImportError as e:
            raise ImportError("PyYAML is required for YAML config files. Install with: pip install pyyaml") from e

        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {})

    @classmethod
    def from_file(cls, path: str | Path) -> FingerprintConfig:
        """Load configuration from file (auto-detect format).

        Supports JSON (.json) and YAML (.yaml, .yml) files.

        Raises:
            ValueError: If file extension is not recognized.
        """
        path = Path(path)
        suffix = path.suffix.lower()

        if suffix == ".json":
            return cls.from_json(path)
        elif suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        else:
            raise ValueError(f"Unsupported config file format: {suffix}. Use .json or .yaml/.yml")
