"""
Typed error classes for abi-bindgen.

Every failure raised by the generation pipeline derives from
:class:`BindgenError`, so a front-end can catch one base class while tests
and batch drivers can still distinguish specific failure modes.

Each error carries enough context to pinpoint the cause:

- ``entry``: the ABI entry that failed, as ``name`` or ``#index`` when the
  entry has no usable name
- ``path``: the parameter path inside that entry, e.g. ``inputs[1].components[0]``

No error raised here is transient. The pipeline aborts the current run on
the first one and never retries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = [
    "BindgenError",
    "AbiParseError",
    "UnknownTypeError",
    "UnsupportedTypeError",
    "DuplicateSelectorError",
    "DuplicateIdentifierError",
    "InvalidLabelError",
]


class BindgenError(Exception):
    """Base class for all binding generator errors."""


def _where(entry: Optional[str], path: Optional[str]) -> str:
    parts = []
    if entry:
        parts.append(f"entry={entry}")
    if path:
        parts.append(f"param={path}")
    return (" [" + ", ".join(parts) + "]") if parts else ""


@dataclass
class AbiParseError(BindgenError):
    """
    Raised when an ABI document or one of its function entries is malformed.

    Typical causes: missing ``name``, a parameter without ``type``, a tuple
    without ``components``, or an invalid ``stateMutability``.
    """

    message: str
    entry: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        return f"{type(self).__name__}{_where(self.entry, self.path)}: {self.message}"


@dataclass
class UnknownTypeError(AbiParseError):
    """Raised for a type string outside the ABI type grammar (e.g. ``uint7``)."""

    type_string: str = ""


@dataclass
class UnsupportedTypeError(BindgenError):
    """
    Raised by the type mapper for a well-formed ABI type that has no Python
    mapping (``fixedMxN``, ``ufixedMxN``, ``function``).
    """

    message: str
    type_string: str = ""
    entry: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        return f"UnsupportedTypeError{_where(self.entry, self.path)}: {self.message}"


@dataclass
class DuplicateSelectorError(BindgenError):
    """Two signatures in one module map to the same 4-byte selector."""

    selector: str
    first: str
    second: str
    entry: Optional[str] = None

    def __str__(self) -> str:
        if self.first == self.second:
            why = f"{self.first} is declared more than once"
        else:
            why = f"{self.first} and {self.second} collide"
        return f"DuplicateSelectorError{_where(self.entry, None)}: selector {self.selector}: {why}"


@dataclass
class DuplicateIdentifierError(BindgenError):
    """
    The naming transform produced the same binding identifier for two
    signatures even though their selectors differ.
    """

    identifier: str
    first: str
    second: str
    entry: Optional[str] = None

    def __str__(self) -> str:
        return (
            f"DuplicateIdentifierError{_where(self.entry, None)}: "
            f"identifier {self.identifier!r} produced by both {self.first} and {self.second}"
        )


@dataclass
class InvalidLabelError(BindgenError):
    """
    A module name or source label cannot be placed in the generated header
    (control characters, quotes or backslashes).
    """

    field: str
    value: str

    def __str__(self) -> str:
        return f"InvalidLabelError: {self.field} {self.value!r} cannot appear in generated code"
