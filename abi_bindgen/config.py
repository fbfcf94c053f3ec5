"""
Generator configuration: mapper settings, batch concurrency and logging.

- Loads sane defaults and supports overrides via environment variables
  (``ABI_BINDGEN_*``).
- The mapper settings (address type and the module it is imported from)
  change emitted text; everything else only changes how a run behaves.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .typemap import DEFAULT_ADDRESS_TYPE, TypeMapper, default_table

_DEFAULT_ADDRESS_MODULE = "eth_typing"
_DOTTED_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
_IDENT_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("plain", "json")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _check_address(address_type: str, address_module: Optional[str]) -> None:
    if not _IDENT_RE.match(address_type):
        raise ValueError(f"address type must be an identifier, got: {address_type!r}")
    if address_module and not _DOTTED_RE.match(address_module):
        raise ValueError(f"address module must be a dotted module path, got: {address_module!r}")


def _check_logging(level: str, fmt: str) -> None:
    if level not in _LOG_LEVELS:
        raise ValueError(f"log level must be one of {', '.join(_LOG_LEVELS)}, got: {level!r}")
    if fmt not in _LOG_FORMATS:
        raise ValueError(f"log format must be plain or json, got: {fmt!r}")


@dataclass
class BindgenConfig:
    # Mapper
    address_type: str = DEFAULT_ADDRESS_TYPE
    address_module: Optional[str] = field(default=_DEFAULT_ADDRESS_MODULE)
    # Batch
    max_workers: int = 4
    # Logging
    log_level: str = "WARNING"
    log_format: str = "plain"

    @classmethod
    def from_env(cls, prefix: str = "ABI_BINDGEN_") -> "BindgenConfig":
        """
        Create config from environment variables:

        ABI_BINDGEN_ADDRESS_TYPE    (identifier, default ChecksumAddress)
        ABI_BINDGEN_ADDRESS_MODULE  (dotted path, default eth_typing; empty for builtins)
        ABI_BINDGEN_MAX_WORKERS     (int)
        ABI_BINDGEN_LOG_LEVEL       (DEBUG|INFO|WARNING|ERROR)
        ABI_BINDGEN_LOG_FORMAT      (plain|json)
        """
        address_type = _env(f"{prefix}ADDRESS_TYPE", DEFAULT_ADDRESS_TYPE) or DEFAULT_ADDRESS_TYPE
        address_module = _env(f"{prefix}ADDRESS_MODULE", _DEFAULT_ADDRESS_MODULE) or None
        _check_address(address_type, address_module)
        return cls(
            address_type=address_type,
            address_module=address_module,
            max_workers=int(_env(f"{prefix}MAX_WORKERS", "4") or 4),
            log_level=(_env(f"{prefix}LOG_LEVEL", "WARNING") or "WARNING").upper(),
            log_format=(_env(f"{prefix}LOG_FORMAT", "plain") or "plain").lower(),
        )

    @classmethod
    def with_overrides(
        cls, base: Optional["BindgenConfig"] = None, **overrides: Any
    ) -> "BindgenConfig":
        """
        Build from an existing config plus keyword overrides.
        Unknown keys and ``None`` values are ignored.
        """
        base = base or cls.from_env()
        data = base.to_dict()
        data.update({k: v for k, v in overrides.items() if k in data and v is not None})
        if "address_module" in overrides and overrides["address_module"] == "":
            data["address_module"] = None
        _check_address(data["address_type"], data["address_module"])
        data["log_level"] = str(data["log_level"]).upper()
        data["log_format"] = str(data["log_format"]).lower()
        _check_logging(data["log_level"], data["log_format"])
        if int(data["max_workers"]) < 1:
            raise ValueError("max_workers must be >= 1")
        return cls(**data)

    def type_mapper(self) -> TypeMapper:
        return TypeMapper(default_table(self.address_type))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address_type": self.address_type,
            "address_module": self.address_module,
            "max_workers": int(self.max_workers),
            "log_level": self.log_level,
            "log_format": self.log_format,
        }


__all__ = ["BindgenConfig"]
